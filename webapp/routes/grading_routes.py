"""
Grading Routes

The grading form, the results page and the JSON view of a grading session.
"""

from typing import List

from flask import (
    Blueprint,
    abort,
    current_app,
    flash,
    jsonify,
    redirect,
    render_template,
    url_for,
)
from flask_login import current_user, login_required

from src.constants import SUBJECT_NAMES, SUBJECTS, TEMPLATE_RUBRICS
from src.exceptions import NotFoundError, ProcessingError, ValidationError
from src.models.api_responses import APIResponse
from src.models.grading_models import GradingSession, StudentFile
from src.parsing.parse_document import DocumentParser, extract_rubric_text
from src.parsing.parse_rubric import get_template_rubric
from src.services.grading_service import validate_grading_request
from src.services.ocr_service import OCRServiceError
from utils.logger import logger
from webapp.app_factory import get_service
from webapp.forms import GradingForm

grading_bp = Blueprint("grading", __name__, url_prefix="/grading")
grading_api_bp = Blueprint("grading_api", __name__, url_prefix="/api/grading")


def _uploaded_student_files(form: GradingForm) -> List[StudentFile]:
    files = []
    for storage in form.student_files.data or []:
        if not storage or not storage.filename:
            continue
        files.append(
            StudentFile(
                filename=storage.filename,
                content=storage.read(),
                mime_type=storage.mimetype
                or DocumentParser.get_file_type(storage.filename),
            )
        )
    return files


def _render_form(form: GradingForm, status: int = 200):
    return (
        render_template(
            "grading/grade.html",
            form=form,
            subjects=SUBJECTS,
            template_rubrics=TEMPLATE_RUBRICS,
        ),
        status,
    )


def _get_owned_session(session_id: str) -> GradingSession:
    grading_session = get_service("results_store").get(session_id)
    if grading_session is None or grading_session.user_id != current_user.id:
        raise NotFoundError(
            f"Grading session {session_id} not found",
            resource_type="grading_session",
            resource_id=session_id,
        )
    return grading_session


@grading_bp.route("", methods=["GET", "POST"])
@login_required
def grade():
    """Show the grading form, or grade the submitted files."""
    form = GradingForm()
    if not form.is_submitted():
        return _render_form(form)

    if not form.validate():
        for field_name, errors in form.errors.items():
            label = getattr(form, field_name).label.text
            for error in errors:
                flash(f"{label}: {error}", "error")
        return _render_form(form, 400)

    subject = form.subject.data
    use_template = form.rubric_mode.data == "template"
    rubric_upload = None if use_template else form.rubric_file.data
    if rubric_upload is not None and not rubric_upload.filename:
        rubric_upload = None
    student_files = _uploaded_student_files(form)

    try:
        validate_grading_request(
            subject,
            student_files,
            rubric_filename=rubric_upload.filename if rubric_upload else None,
            use_template=use_template,
            max_files=current_app.config["MAX_STUDENT_FILES"],
            student_extensions=current_app.config["STUDENT_FILE_EXTENSIONS"],
            rubric_extensions=current_app.config["RUBRIC_FILE_EXTENSIONS"],
        )

        if use_template:
            rubric_text = get_template_rubric(subject)
            rubric_source = f"Template: {SUBJECT_NAMES.get(subject, subject)}"
        else:
            rubric_text = extract_rubric_text(
                rubric_upload.filename,
                rubric_upload.read(),
                ocr=get_service("ocr_service"),
            )
            rubric_source = rubric_upload.filename

        results = get_service("grading_service").process_student_answers(
            student_files, rubric_text, subject
        )

    except ValidationError as e:
        flash(f"{e.title}: {e.user_message}", "error")
        return _render_form(form, 400)
    except ProcessingError as e:
        flash(f"Rubric unreadable: {e.user_message}", "error")
        return _render_form(form, 400)
    except OCRServiceError as e:
        logger.error(f"Rubric OCR failed: {e}")
        flash(
            "Error: The rubric image could not be read. Please upload a text rubric.",
            "error",
        )
        return _render_form(form, 400)

    grading_session = GradingSession(
        id=GradingSession.new_id(),
        name=form.session_name.data.strip(),
        subject=subject,
        user_id=current_user.id,
        rubric_source=rubric_source,
        results=results,
    )
    get_service("results_store").add(grading_session)
    logger.info(
        f"Grading session {grading_session.id} finished: {len(results)} student(s)"
    )

    flash("Grading complete: your files have been graded", "success")
    return redirect(url_for("grading.results", session_id=grading_session.id))


@grading_bp.route("/results/<session_id>")
@login_required
def results(session_id):
    """Per-student results of one grading session."""
    try:
        grading_session = _get_owned_session(session_id)
    except NotFoundError:
        abort(404)
    return render_template(
        "grading/results.html",
        grading_session=grading_session,
        subject_name=SUBJECT_NAMES.get(grading_session.subject, grading_session.subject),
    )


@grading_api_bp.route("/results/<session_id>")
@login_required
def results_json(session_id):
    """JSON view of one grading session."""
    grading_session = _get_owned_session(session_id)
    return jsonify(APIResponse.success(grading_session.to_dict()).to_dict())
