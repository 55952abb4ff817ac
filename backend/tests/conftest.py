import os

# Must be set before adaptfit.config is imported anywhere
os.environ["SQLALCHEMY_DATABASE_URL"] = "sqlite://"
os.environ["KV_BACKEND"] = "sql"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["AUTH_PROVIDER"] = "local"
os.environ["LOG_LEVEL"] = "WARNING"
