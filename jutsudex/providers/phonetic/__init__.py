"""Phonetic providers.

PinyinPhoneticProvider builds lowercase tone-less pinyin keys for the
``HOMOPHONE`` match tier and the phonetic backfill.
"""

from jutsudex.providers.phonetic.pypinyin_provider import PinyinPhoneticProvider

__all__ = ["PinyinPhoneticProvider"]
