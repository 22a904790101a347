import logging

from flask import Flask
from flask_cors import CORS

from auth import login_manager
from config import Config
from errors import register_error_handlers
from models import db
from routes import other_api_bp
from routes.friendship import friendship_api_bp
from routes.user import user_api_bp

logger = logging.getLogger(__name__)


def configure_logging(level):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    CORS(app)

    # Initialize SQLAlchemy with the configured engine options
    db.init_app(app)
    logger.info(
        "Engine options: %s", app.config.get("SQLALCHEMY_ENGINE_OPTIONS")
    )

    login_manager.init_app(app)
    register_error_handlers(app)

    # Register your Blueprints
    app.register_blueprint(other_api_bp)
    app.register_blueprint(user_api_bp)
    app.register_blueprint(friendship_api_bp)

    # Ensure DB tables exist
    with app.app_context():
        db.create_all()

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=True)
