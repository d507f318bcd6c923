"""
DOMAIN LAYER - Chat entities, value objects, events and ports.

Pure Python: no FastAPI, no Prisma, no Redis imports here.
"""
