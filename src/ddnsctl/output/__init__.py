"""Human (Rich) and JSON rendering of ServiceResult."""
