"""Clients for remote services this backend depends on."""
