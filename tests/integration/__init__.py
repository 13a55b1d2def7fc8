"""CLI-level tests for `rocketpool minipool withdraw` with the chain gateway mocked out."""
