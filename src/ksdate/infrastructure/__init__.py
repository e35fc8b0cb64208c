"""Infrastructure layer — host collaborators the date core renders through."""
