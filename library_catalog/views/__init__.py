from flask import redirect, url_for

from . import catalog, users


def register_blueprints(app):
    app.register_blueprint(catalog.bp)
    app.register_blueprint(users.bp)

    @app.route("/")
    def home():
        return redirect(url_for("catalog.index"))
