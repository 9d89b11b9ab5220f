"""Service layer — parse configuration values and report ServiceResult."""
