"""Seed the database with sample users and posts."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from blogcms.database import SessionLocal, engine, Base
import blogcms.models  # noqa: F401

from blogcms.models.user import User
from blogcms.schemas.post import PostCreate, PostUpdate
from blogcms.services import post_service


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        users = [
            User(username="admin", email="admin@example.com", role="admin"),
            User(username="writer", email="writer@example.com", role="employee"),
            User(username="editor", email="editor@example.com", role="employee"),
        ]
        db.add_all(users)
        db.commit()
        admin, writer, editor = users

        # Posts go through the service so each one gets its history entries.
        welcome = post_service.create_post(
            db,
            PostCreate(title="Welcome", description="First post on the blog", content="<p>Hello!</p>"),
            admin,
        )
        post_service.update_post(db, welcome.post_id, PostUpdate(status="published"), admin)

        notes = post_service.create_post(
            db,
            PostCreate(title="Release notes", description="What changed this month"),
            writer,
        )
        post_service.update_post(db, notes.post_id, PostUpdate(content="<ul><li>Image captions</li></ul>"), editor)

        for i in range(1, 13):
            post_service.create_post(db, PostCreate(title=f"Draft idea #{i}"), writer)

        print("Seed data created successfully.")
        print("  Users: admin@example.com, writer@example.com, editor@example.com")
        print(f"  Posts: {db.query(blogcms.models.Post).count()}")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
