"""FairGrade test suite."""
