"""Service layer. Every public method returns a ServiceResult."""
