"""
CareerHub Database Seeder

Creates a small demo community:
- One whitelisted resident (resident@example.com)
- Approved job, internship and course postings, plus one job awaiting review
- A CV for the resident that matches the approved job
- A directory profile for the resident and one featured community benefit
"""

import sys
sys.path.insert(0, ".")

from careerhub.core.config import settings
from careerhub.db.session import SessionLocal, engine
from careerhub.db.base import Base
from careerhub import models  # noqa: F401
from careerhub.repositories import sql_stores
from careerhub.services import auth, benefits, cv_showcase, directory, postings, whitelist


def seed_database():
    """Seed the database with demo data."""

    # Create all tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    stores = sql_stores(db)

    try:
        # Check if already seeded
        if stores.whitelist.first({"email": "resident@example.com"}) is not None:
            print("Database already seeded. Skipping...")
            return

        print("Seeding database...")

        # 1. Admin session used to moderate the demo postings
        admin_token = auth.admin_login(stores, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)["session_id"]
        admin = auth.resolve_session(stores, admin_token)

        # 2. Whitelisted resident
        whitelist.add_to_whitelist(
            stores,
            "resident@example.com",
            admin,
            name="Layla Hassan",
            unit="B2-104",
            phone="+20 100 000 0000",
        )

        # 3. Postings
        job = postings.submit_posting(stores, "jobs", {
            "title": "Senior Python Developer",
            "company": "Nile Analytics",
            "description": "Build data services with Python, Django and PostgreSQL on AWS.",
            "requirements": "5+ years of Python, strong SQL, Docker",
            "skills": "python, django, postgresql, aws, docker",
            "industry": "Technology",
            "experience_level": "Senior",
            "job_type": "Full-time",
            "location": "Cairo",
            "contact_email": "careers@nileanalytics.example",
            "contact_phone": "+20 2 0000 0000",
        })
        postings.approve_posting(stores, "jobs", job["id"], admin)

        postings.submit_posting(stores, "jobs", {
            "title": "Marketing Manager",
            "company": "Giza Retail",
            "description": "Lead digital marketing strategy for our retail brands.",
            "skills": "marketing, strategy, digital",
            "industry": "Retail",
            "contact_email": "hr@gizaretail.example",
            "contact_phone": "+20 2 1111 1111",
        })

        internship = postings.submit_posting(stores, "internships", {
            "title": "Finance Intern",
            "company": "Delta Capital",
            "description": "Support the accounting team with monthly reporting.",
            "duration": "3 months",
            "is_paid": True,
            "stipend": "EGP 5,000 / month",
            "contact_email": "interns@deltacapital.example",
        })
        postings.approve_posting(stores, "internships", internship["id"], admin)

        course = postings.submit_posting(stores, "courses", {
            "title": "Intro to Project Management",
            "description": "Four evening sessions on planning, risk and team communication.",
            "type": "workshop",
            "instructor": "Omar Fathy",
            "is_online": True,
        })
        postings.approve_posting(stores, "courses", course["id"], admin)

        # 4. Resident CV
        cv = cv_showcase.create_cv(stores, {
            "name": "Layla Hassan",
            "email": "resident@example.com",
            "title": "Senior Python Developer",
            "section": "Technology/IT",
            "bio": "Backend engineer working with Python, Django and AWS.",
            "skills": ["python", "django", "docker", "postgresql"],
            "years_of_experience": "7",
        })

        # 5. Directory profile and a featured community benefit
        resident_token = auth.login(stores, "resident@example.com")["session_id"]
        directory.create_profile(stores, {
            "name": "Layla Hassan",
            "title": "Backend Engineer",
            "industry": "Technology",
            "skills": "python, django, aws",
            "how_can_you_support": "Happy to review CVs and mock-interview developers.",
        }, auth.resolve_session(stores, resident_token))
        auth.logout(stores, resident_token)

        benefit = benefits.create_benefit(stores, {
            "title": "15% off at Cafe Nour",
            "description": "Show your resident card at the counter.",
            "business_name": "Cafe Nour",
            "discount_percentage": "15",
            "category": "Food & Drink",
        }, admin)
        benefits.update_benefit(stores, benefit["id"], {"show_on_homepage": True}, admin)

        auth.logout(stores, admin_token)

        # Commit all changes
        db.commit()

        print("Database seeded successfully!")
        print("\nResident login: resident@example.com")
        print(f"Admin login:    {settings.ADMIN_USERNAME}")
        print(f"Demo CV id:     {cv['id']}")

    except Exception as e:
        db.rollback()
        print(f"Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
