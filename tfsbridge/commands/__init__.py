"""Click commands for the tfsbridge CLI."""
