"""Application factory for the local library catalog.

Wires configuration, logging, the database, CSRF protection, security
headers, rate limiting, the catalog blueprints, the central error page and
the ``init-db`` command.
"""
import logging
import time

import click
from flask import Flask, current_app, g, render_template, request
from flask_talisman import Talisman
from werkzeug.exceptions import HTTPException

from .config import Config
from .errors import CatalogError
from .extensions import csrf, db, limiter
from .models import Book, Genre
from .views import register_blueprints

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

request_logger = logging.getLogger("library_catalog.requests")


def configure_logging(app):
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    package_logger = logging.getLogger("library_catalog")
    package_logger.setLevel(level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    app.logger.setLevel(level)

    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.get("request_started")
        elapsed = (time.perf_counter() - started) * 1000 if started is not None else 0.0
        request_logger.info("%s %s %s %.1f ms", request.method, request.path, response.status_code, elapsed)
        return response


def _render_error(message, status, error=None):
    # Exception details are only shown when running in debug mode
    details = error if current_app.debug else None
    return render_template("error.html", title="Error", message=message, status=status, error=details), status


def register_error_handlers(app):

    @app.errorhandler(CatalogError)
    def handle_catalog_error(e):
        if e.status >= 500:
            app.logger.error("%s: %s", type(e).__name__, e.message, exc_info=e)
        return _render_error(e.message, e.status, e)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return _render_error(e.name, e.code or 500, e)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return _render_error("Internal Server Error", 500, e)


def register_commands(app):

    @app.cli.command("init-db")
    @click.option("--seed", is_flag=True, help="Add sample genres and books when the catalog is empty.")
    def init_db(seed):
        """Create the catalog tables."""
        db.create_all()
        click.echo("Initialized the database.")
        if not seed:
            return
        if Genre.query.first() is not None:
            click.echo("Catalog already has data; skipping sample data.")
            return
        fantasy = Genre(name="Fantasy")
        science_fiction = Genre(name="Science Fiction")
        poetry = Genre(name="French Poetry")
        db.session.add_all([fantasy, science_fiction, poetry])
        db.session.add_all([
            Book(title="The Name of the Wind", genres=[fantasy],
                 summary="A gifted young man grows up to be the most notorious wizard his world has ever seen."),
            Book(title="The Wise Man's Fear", genres=[fantasy],
                 summary="Kvothe continues his search for answers about the Chandrian."),
            Book(title="Apes and Angels", genres=[science_fiction],
                 summary="Humankind headed out to the stars not for conquest, nor exploration, nor curiosity."),
        ])
        db.session.commit()
        click.echo("Added sample genres and books.")


def create_app(config_object=None):
    app = Flask(__name__, static_folder=None, template_folder="templates")
    app.config.from_object(config_object or Config)

    configure_logging(app)

    db.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)
    Talisman(
        app,
        content_security_policy=app.config["CONTENT_SECURITY_POLICY"],
        force_https=app.config["FORCE_HTTPS"],
        session_cookie_secure=app.config["FORCE_HTTPS"],
    )

    register_blueprints(app)
    register_error_handlers(app)
    register_commands(app)

    app.logger.debug("Catalog app created with database %s", app.config["SQLALCHEMY_DATABASE_URI"])
    return app
