from flask_wtf import FlaskForm
from flask_wtf.file import FileField, MultipleFileField
from wtforms import BooleanField, PasswordField, RadioField, StringField, SubmitField
from wtforms.validators import DataRequired, EqualTo, Length

from src.constants import SUBJECTS


class LoginForm(FlaskForm):
    email = StringField("Email", validators=[DataRequired(), Length(max=120)])
    password = PasswordField("Password", validators=[DataRequired()])
    remember_me = BooleanField("Remember Me")
    submit = SubmitField("Sign In")


class RegisterForm(FlaskForm):
    name = StringField("Name", validators=[DataRequired(), Length(max=120)])
    email = StringField("Email", validators=[DataRequired(), Length(max=120)])
    password = PasswordField("Password", validators=[DataRequired(), Length(min=6)])
    confirm_password = PasswordField(
        "Confirm Password",
        validators=[DataRequired(), EqualTo("password", "Passwords do not match")],
    )
    submit = SubmitField("Create Account")


class GradingForm(FlaskForm):
    """Grading session form.

    Subject, file and rubric checks (presence and type) are done by the grading
    service so the messages match the notifications shown to the user.
    """

    session_name = StringField(
        "Session Name", validators=[DataRequired(), Length(max=200)]
    )
    subject = RadioField("Subject", choices=SUBJECTS, validate_choice=False)
    student_files = MultipleFileField("Student Answer Files")
    rubric_mode = RadioField(
        "Grading Rubric",
        choices=[
            ("upload", "Upload your own rubric"),
            ("template", "Use a template rubric"),
        ],
        default="upload",
    )
    rubric_file = FileField("Rubric File")
    submit = SubmitField("Start Grading")
