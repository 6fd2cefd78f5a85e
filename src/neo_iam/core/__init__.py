"""Core building blocks for neo-iam: exceptions, value objects, aggregate base."""
