"""
Careers Portal Database Seeder

Creates one user per role (admin, HR, applicant) with hashed passwords,
matching the credentials of the built-in demo accounts.
"""

import sys
sys.path.insert(0, ".")

from portal.db.session import SessionLocal, engine
from portal.db.base import Base
from portal.models.user import Role, User
from portal.core.security import get_password_hash

SEED_USERS = [
    {
        "email": "admin@amealio.com",
        "password": "admin123",
        "first_name": "Admin",
        "last_name": "User",
        "role": Role.ADMIN,
        "phone_number": "+1 (555) 123-4567",
        "address": "123 Admin Street, San Francisco, CA",
    },
    {
        "email": "hr@amealio.com",
        "password": "hr123",
        "first_name": "HR",
        "last_name": "Manager",
        "role": Role.HR,
        "phone_number": "+1 (555) 234-5678",
        "address": "456 HR Avenue, San Francisco, CA",
    },
    {
        "email": "user@amealio.com",
        "password": "user123",
        "first_name": "John",
        "last_name": "Doe",
        "role": Role.APPLICANT,
        "phone_number": "+1 (555) 345-6789",
        "address": "789 Applicant Road, San Francisco, CA",
    },
]


def seed_database():
    """Seed the database with one user per role."""

    # Create all tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        created = []
        for data in SEED_USERS:
            if db.query(User).filter(User.email == data["email"]).first():
                continue
            db.add(User(
                email=data["email"],
                password=get_password_hash(data["password"]),
                first_name=data["first_name"],
                last_name=data["last_name"],
                role=data["role"].value,
                phone_number=data["phone_number"],
                address=data["address"],
            ))
            created.append(data)

        if not created:
            print("Database already seeded. Skipping...")
            return

        db.commit()

        print("✅ Database seeded successfully!")
        print("\n📋 Created Users:")
        for data in created:
            print(f"   - {data['email']} (password: {data['password']}) [{data['role'].value}]")

    except Exception as e:
        db.rollback()
        print(f"❌ Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
