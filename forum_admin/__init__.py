"""Administrative query, analytics and action engine for the forum dataset."""
