"""Party ledger reconstruction service package."""
