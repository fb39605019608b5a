from agents.base import BaseAgent
from agents.join import JoinAgent
from agents.split import SplitAgent

__all__ = ['BaseAgent', 'JoinAgent', 'SplitAgent']
