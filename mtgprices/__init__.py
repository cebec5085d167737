"""Trading-bot price report loader."""
