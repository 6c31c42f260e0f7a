import os

# Keep the app's module-level engine off the working directory during tests.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
