"""Onion-style composition of async middleware."""
