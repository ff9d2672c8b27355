import logging
from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate
from config import config_dict, CurrentConfig
from models import db
from routes.authentication import auth_bp
from routes.users import users_bp
from routes.courses import courses_bp
from routes.lessons import lessons_bp
from routes.quizzes import quizzes_bp
from routes.progress import progress_bp
from utils.commands import register_commands
from utils.errors import register_error_handlers

migrate = Migrate()


def configure_logging(app):
    """Attach a stream handler to the app logger once."""
    if app.logger.handlers:
        return

    app.logger.setLevel(getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO))
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    app.logger.addHandler(handler)
    app.logger.propagate = False


def create_app(config_name=None):
    app = Flask(__name__)

    config_class = config_dict[config_name] if config_name else CurrentConfig
    app.config.from_object(config_class)

    configure_logging(app)
    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    db.init_app(app)
    migrate.init_app(app, db)

    register_error_handlers(app)
    register_commands(app)

    @app.route('/')
    def home():
        return jsonify({"message": "Welcome to the LMS API!"})

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(courses_bp, url_prefix='/api/courses')
    app.register_blueprint(lessons_bp, url_prefix='/api')
    app.register_blueprint(quizzes_bp, url_prefix='/api')
    app.register_blueprint(progress_bp, url_prefix='/api')

    app.logger.info(f"LMS API configured ({config_class.__name__})")
    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=app.config.get('DEBUG', False))
