from flask import Blueprint

bp = Blueprint("users", __name__, url_prefix="/users")


@bp.route("/")
def user_list():
    return "Respond with a resource"


@bp.route("/cool")
def cool():
    return "You're so cool, i love that."
