from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, SelectField, PasswordField
from wtforms.validators import DataRequired, Length, EqualTo


def optional_int(value):
    """Coerce a select value to int; the blank choice means no category."""
    if value in (None, "", "None"):
        return None
    return int(value)


class CategoryForm(FlaskForm):
    name = StringField("Name", validators=[DataRequired(), Length(min=1, max=50)])


class PostForm(FlaskForm):
    title = StringField("Title", validators=[DataRequired(), Length(min=1, max=200)])
    description = TextAreaField("Description", validators=[DataRequired()])
    # Choices are filled per request; the service checks the category exists
    category_id = SelectField("Category", coerce=optional_int, validate_choice=False)


class ActionForm(FlaskForm):
    """Empty form so POST-only buttons (delete, logout) carry a CSRF token."""
    pass


class LoginForm(FlaskForm):
    username = StringField("Username", validators=[DataRequired()])
    password = PasswordField("Password", validators=[DataRequired()])


class RegisterForm(FlaskForm):
    username = StringField("Username", validators=[DataRequired(), Length(min=3, max=255)])
    password = PasswordField("Password", validators=[DataRequired(), Length(min=8)])
    confirm = PasswordField(
        "Confirm Password",
        validators=[DataRequired(), EqualTo("password", message="Passwords must match.")]
    )
