from flask_wtf import FlaskForm
from wtforms import HiddenField, StringField, SubmitField


# --- Forms ---
# Field rules live in sanitize.py; these forms bind request data and carry the CSRF token.
class GenreForm(FlaskForm):
    name = StringField("Genre", render_kw={"placeholder": "Fantasy, Poetry etc."})
    submit = SubmitField("Submit")


class GenreDeleteForm(FlaskForm):
    genreid = HiddenField()
    submit = SubmitField("Delete")
