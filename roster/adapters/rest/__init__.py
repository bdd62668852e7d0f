"""REST adapters exposing employee operations over HTTP."""
