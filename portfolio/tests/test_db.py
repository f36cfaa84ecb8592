import unittest

from portfolio.db import Base, InMemoryDbClient, SqlDbClient
from portfolio.errors import StorageError


class SqlDbClientTests(unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the SQL client logic.
    """

    def setUp(self):
        self.db = SqlDbClient("sqlite+pysqlite:///:memory:")

    def test_requires_database_url(self):
        with self.assertRaises(ValueError):
            SqlDbClient("")

    def test_create_and_list_blogs(self):
        created = self.db.create_blog("Hello", "World", "/uploads/a.png")
        blogs = self.db.list_blogs()
        self.assertEqual(len(blogs), 1)
        self.assertEqual(blogs[0].id, created.id)
        self.assertEqual(
            blogs[0].as_dict(),
            {
                "_id": created.id,
                "title": "Hello",
                "content": "World",
                "imageUrl": "/uploads/a.png",
            },
        )

    def test_create_and_list_projects(self):
        created = self.db.create_project("X", "overview", "/uploads/x.png", "/uploads/x.pdf")
        projects = self.db.list_projects()
        self.assertEqual([p.id for p in projects], [created.id])
        self.assertEqual(projects[0].file_url, "/uploads/x.pdf")

    def test_list_empty(self):
        self.assertEqual(self.db.list_blogs(), [])
        self.assertEqual(self.db.list_projects(), [])

    def test_identical_records_get_distinct_ids(self):
        first = self.db.create_blog("Same", "Same", "same.png")
        second = self.db.create_blog("Same", "Same", "same.png")
        self.assertNotEqual(first.id, second.id)
        self.assertEqual(len(self.db.list_blogs()), 2)

    def test_driver_errors_become_storage_errors(self):
        self.db.list_blogs()
        Base.metadata.drop_all(self.db.engine)

        with self.assertRaises(StorageError) as ctx:
            self.db.list_blogs()
        self.assertTrue(ctx.exception.detail)

        with self.assertRaises(StorageError):
            self.db.create_project("X", "o", "i", "f")


class InMemoryDbClientTests(unittest.TestCase):
    def test_blog_and_project_stores_are_independent(self):
        db = InMemoryDbClient()
        db.create_blog("Hello", "World", "a.png")
        self.assertEqual(len(db.list_blogs()), 1)
        self.assertEqual(db.list_projects(), [])

        db.create_project("X", "o", "i", "f")
        self.assertEqual(len(db.list_projects()), 1)

        db.reset()
        self.assertEqual(db.list_blogs(), [])
        self.assertEqual(db.list_projects(), [])


if __name__ == "__main__":
    unittest.main()
