import os
from dotenv import load_dotenv

# Only load .env in development mode (Optional)
if os.getenv("FLASK_ENV") == "development":
    load_dotenv()


class Config:
    # --------------------------------------
    # Flask / SQLAlchemy Settings
    # --------------------------------------
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "SQLALCHEMY_DATABASE_URI", "sqlite:///social.db"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # 'pool_pre_ping' tests each pooled connection with a SELECT 1 before use,
    # 'pool_recycle' drops connections idle for longer than N seconds.
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": 300,  # 5 minutes
    }

    # --------------------------------------
    # Session tokens
    # (Make sure to set these as environment variables in production)
    # --------------------------------------
    SECRET_KEY = os.getenv("SECRET_KEY", "default_secret_key")
    JWT_SECRET = os.getenv(
        "JWT_SECRET", "default_jwt_secret_change_me_in_production"
    )
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_DAYS = int(os.getenv("JWT_EXPIRE_DAYS", 15))
    COOKIE_EXPIRE_DAYS = int(os.getenv("COOKIE_EXPIRE_DAYS", 15))

    # Read by flask-cors; the session cookie is sent cross-site.
    CORS_SUPPORTS_CREDENTIALS = (
        os.getenv("CORS_SUPPORTS_CREDENTIALS", "True") == "True"
    )

    # --------------------------------------
    # Friend graph
    # --------------------------------------
    RECOMMENDATION_LIMIT = int(os.getenv("RECOMMENDATION_LIMIT", 5))

    # --------------------------------------
    # Server / logging
    # --------------------------------------
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    PORT = int(os.getenv("PORT", 3000))
