"""Generate the typed Codebreaker client from its OpenAPI document."""
