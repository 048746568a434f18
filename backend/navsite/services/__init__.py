"""Business services and storage backends."""
