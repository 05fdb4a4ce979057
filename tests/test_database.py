import os
import tempfile
import unittest
from pathlib import Path

# Keep the module-level engine away from the on-disk database
os.environ.setdefault("DATABASE_URL", "sqlite://")

from core.database import build_engine, init_db  # noqa: E402


class BuildEngineTests(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp = Path(tmp.name)

    def test_creates_missing_directory_for_absolute_path(self):
        db_path = self.tmp / "nested" / "dir" / "requests.db"
        engine = build_engine(f"sqlite:///{db_path}")
        self.addCleanup(engine.dispose)
        init_db(engine)
        self.assertTrue(db_path.exists())

    def test_relative_path_resolves_against_working_directory(self):
        cwd = os.getcwd()
        os.chdir(self.tmp)
        self.addCleanup(os.chdir, cwd)

        engine = build_engine("sqlite:///data/purchase_requests.db")
        self.addCleanup(engine.dispose)
        init_db(engine)
        self.assertTrue((self.tmp / "data" / "purchase_requests.db").exists())

    def test_in_memory_database_needs_no_directory(self):
        engine = build_engine("sqlite://")
        self.addCleanup(engine.dispose)
        init_db(engine)


if __name__ == "__main__":
    unittest.main()
