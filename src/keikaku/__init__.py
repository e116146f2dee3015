"""keikaku: spaced-repetition scheduling core for Japanese study cards."""

from keikaku.consts import VERSION

__version__ = VERSION
