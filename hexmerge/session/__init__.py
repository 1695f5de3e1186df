"""
Session module - sesja gry i obserwatorzy.

Zawiera:
- GameSession: Orkiestracja ruchów, stan gry
- GameListener: Bazowy obserwator (renderer, logger)
- start_session: Punkt wejścia dla renderera
"""

from .listener import GameListener
from .game import GameSession, start_session

__all__ = ["GameListener", "GameSession", "start_session"]
