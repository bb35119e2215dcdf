"""Post-completion bridge hooks: validate a fulfillment and forward funds into a bridge."""
