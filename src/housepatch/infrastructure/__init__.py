"""Infrastructure layer — SQLite persistence for the House aggregate."""
