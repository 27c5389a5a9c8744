"""Service layer — pipeline orchestration and the ServiceResult contract."""
