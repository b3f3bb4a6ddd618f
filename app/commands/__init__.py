"""Slash-command and component handlers.

Handlers are plain functions of (interaction, context). The only state they
touch is the injected session store; outbound REST work is returned as
follow-ups for the caller to run after the primary reply.
"""
