"""Feature packages for neo-iam."""
