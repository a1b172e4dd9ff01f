"""Click commands for the asmdoc CLI."""
