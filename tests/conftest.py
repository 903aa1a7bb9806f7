import os

# Point the application engine at a private in-memory database before any
# test module imports the app.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")
