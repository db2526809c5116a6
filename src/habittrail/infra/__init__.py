"""Infrastructure: database engine and storage backends."""
