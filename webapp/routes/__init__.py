"""Route blueprints for the FairGrade web application."""
