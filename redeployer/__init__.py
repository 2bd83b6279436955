"""Redeploy stale Okteto applications from their source repositories."""
