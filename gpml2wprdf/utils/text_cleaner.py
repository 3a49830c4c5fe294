"""
Text Label Cleaner Module

Cleans text labels taken from GPML elements before they are written as
rdfs:label literals: HTML entities and markup are converted, line breaks
are turned into spaces.
"""

import re
import html


class TextLabelCleaner:
    """
    Cleans text labels of data nodes, groups and complexes.
    """

    SUPERSCRIPT_MAP = {
        '0': '⁰', '1': '¹', '2': '²', '3': '³', '4': '⁴',
        '5': '⁵', '6': '⁶', '7': '⁷', '8': '⁸', '9': '⁹',
        '+': '⁺', '-': '⁻',
    }

    SUBSCRIPT_MAP = {
        '0': '₀', '1': '₁', '2': '₂', '3': '₃', '4': '₄',
        '5': '₅', '6': '₆', '7': '₇', '8': '₈', '9': '₉',
        '+': '₊', '-': '₋',
    }

    @classmethod
    def clean_label(cls, text):
        """
        Clean a text label for use as a literal.

        Args:
            text (str): Raw text label, possibly multi-line or with markup

        Returns:
            str: Single-line cleaned text (None and '' are returned unchanged)
        """
        if not text:
            return text

        text = str(text)
        text = html.unescape(text)
        text = cls._convert_tag(text, 'sup', cls.SUPERSCRIPT_MAP)
        text = cls._convert_tag(text, 'sub', cls.SUBSCRIPT_MAP)

        # Remaining markup is dropped, content kept
        text = re.sub(r'</?[a-zA-Z][^>]*>', '', text)

        # Line breaks become spaces
        return ' '.join(text.split())

    @classmethod
    def _convert_tag(cls, text, tag, char_map):
        pattern = re.compile(rf'<{tag}>(.*?)</{tag}>', re.IGNORECASE)

        def replace(match):
            return ''.join(char_map.get(char, char) for char in match.group(1))

        return pattern.sub(replace, text)


def clean_text_label(text):
    """
    Clean a text label for output.

    Args:
        text: Raw text label

    Returns:
        str: Cleaned text
    """
    return TextLabelCleaner.clean_label(text)
