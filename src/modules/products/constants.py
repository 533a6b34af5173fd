"""Product catalog limits."""

# Upper bound of PositiveIntegerField on every supported database.
MAX_STOCK = 2_147_483_647
