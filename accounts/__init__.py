"""User accounts, trader profiles and admin provisioning."""
