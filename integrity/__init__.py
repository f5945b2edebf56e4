"""Moderation and integrity backend: reactions, follows, reports and the admin audit log."""
