"""Rock/paper/scissors game: rules engine and session lifecycle.

Kept free of FastAPI and platform concerns so it can be unit tested directly.
"""
