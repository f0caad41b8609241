"""Message processors and the chain that runs them."""

from .base import BaseProcessor
from .chain import ProcessorChain
from .code import CodeDetector
from .emoji import EmojiEnlarger
from .mention import MentionExtractor
from .phone import PhoneNumberDetector

__all__ = [
    "BaseProcessor",
    "CodeDetector",
    "EmojiEnlarger",
    "MentionExtractor",
    "PhoneNumberDetector",
    "ProcessorChain",
]
