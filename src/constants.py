"""
Application Constants

Subjects offered on the grading form and the template rubrics used when the
user does not upload one.
"""

# Default values
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000

SUBJECTS = [
    ("math", "Mathematics"),
    ("physics", "Physics"),
    ("biology", "Biology"),
    ("chemistry", "Chemistry"),
    ("english", "English"),
    ("social", "Social Studies"),
]

SUBJECT_NAMES = dict(SUBJECTS)

TEMPLATE_RUBRICS = {
    "math": (
        "Problem Understanding (20%)\n"
        "Method and Reasoning (40%)\n"
        "Accuracy of Calculations (30%)\n"
        "Presentation and Notation (10%)"
    ),
    "physics": (
        "Conceptual Understanding (30%)\n"
        "Application of Formulas (30%)\n"
        "Units and Calculations (25%)\n"
        "Explanation and Diagrams (15%)"
    ),
    "biology": (
        "Knowledge of Concepts (35%)\n"
        "Use of Terminology (20%)\n"
        "Analysis and Interpretation (30%)\n"
        "Clarity of Expression (15%)"
    ),
    "chemistry": (
        "Chemical Concepts (30%)\n"
        "Equations and Stoichiometry (30%)\n"
        "Calculations and Units (25%)\n"
        "Lab and Safety Reasoning (15%)"
    ),
    "english": (
        "Thesis and Argument (30%)\n"
        "Organization and Structure (25%)\n"
        "Evidence and Support (25%)\n"
        "Grammar and Mechanics (20%)"
    ),
    "social": (
        "Historical and Factual Accuracy (30%)\n"
        "Analysis of Causes and Effects (30%)\n"
        "Use of Sources and Examples (25%)\n"
        "Clarity of Writing (15%)"
    ),
}

# Overall feedback bands, checked from the top
FEEDBACK_BANDS = [
    (80, "Excellent work overall!"),
    (60, "Good work with room for improvement."),
    (40, "Needs significant improvement."),
]
FEEDBACK_LOWEST = "Requires extensive revision."
