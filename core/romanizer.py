"""Hangul romanization in several transliteration schemes.

Each syllable in the U+AC00 block is split arithmetically into its initial,
medial and final jamo. Before rendering, every pair of adjacent syllables is
run through the sound changes that matter for a typed answer:

- liaison: a final consonant moves onto a following silent initial (ㅇ)
- palatalization: a final ㄷ/ㅌ before 이 is read ㅈ/ㅊ, and ㄷ before 히 is read ㅊ
- aspiration: ㅎ merges with a following ㄱ/ㄷ/ㅈ
- nasalization: obstruent finals become nasals before ㄴ/ㅁ/ㄹ
- lateralization: ㄴ+ㄹ and ㄹ+ㄴ become ㄹ+ㄹ

The result is then spelled out with the scheme's letter tables.
"""

from .config import HANGUL_SYLLABLE_FIRST, ROMANIZATION_SCHEMES
from .interfaces import Romanizer

SYLLABLE_COUNT = 11172

INITIALS = 'ㄱㄲㄴㄷㄸㄹㅁㅂㅃㅅㅆㅇㅈㅉㅊㅋㅌㅍㅎ'
MEDIALS = 'ㅏㅐㅑㅒㅓㅔㅕㅖㅗㅘㅙㅚㅛㅜㅝㅞㅟㅠㅡㅢㅣ'
FINALS = [
    '', 'ㄱ', 'ㄲ', 'ㄳ', 'ㄴ', 'ㄵ', 'ㄶ', 'ㄷ', 'ㄹ', 'ㄺ', 'ㄻ', 'ㄼ', 'ㄽ', 'ㄾ',
    'ㄿ', 'ㅀ', 'ㅁ', 'ㅂ', 'ㅄ', 'ㅅ', 'ㅆ', 'ㅇ', 'ㅈ', 'ㅊ', 'ㅋ', 'ㅌ', 'ㅍ', 'ㅎ'
]

# Every final is pronounced as one of seven sounds at a syllable boundary
NEUTRAL_FINALS = {
    'ㄱ': 'ㄱ', 'ㄲ': 'ㄱ', 'ㅋ': 'ㄱ', 'ㄳ': 'ㄱ', 'ㄺ': 'ㄱ',
    'ㄴ': 'ㄴ', 'ㄵ': 'ㄴ', 'ㄶ': 'ㄴ',
    'ㄷ': 'ㄷ', 'ㅅ': 'ㄷ', 'ㅆ': 'ㄷ', 'ㅈ': 'ㄷ', 'ㅊ': 'ㄷ', 'ㅌ': 'ㄷ', 'ㅎ': 'ㄷ',
    'ㄹ': 'ㄹ', 'ㄼ': 'ㄹ', 'ㄽ': 'ㄹ', 'ㄾ': 'ㄹ', 'ㅀ': 'ㄹ',
    'ㅁ': 'ㅁ', 'ㄻ': 'ㅁ',
    'ㅂ': 'ㅂ', 'ㅍ': 'ㅂ', 'ㅄ': 'ㅂ', 'ㄿ': 'ㅂ',
    'ㅇ': 'ㅇ',
}

# Final -> (what stays behind, what moves onto the silent initial)
LIAISON = {
    'ㄳ': ('ㄱ', 'ㅅ'), 'ㄵ': ('ㄴ', 'ㅈ'), 'ㄶ': ('', 'ㄴ'), 'ㄺ': ('ㄹ', 'ㄱ'),
    'ㄻ': ('ㄹ', 'ㅁ'), 'ㄼ': ('ㄹ', 'ㅂ'), 'ㄽ': ('ㄹ', 'ㅅ'), 'ㄾ': ('ㄹ', 'ㅌ'),
    'ㄿ': ('ㄹ', 'ㅍ'), 'ㅀ': ('', 'ㄹ'), 'ㅄ': ('ㅂ', 'ㅅ'), 'ㅎ': ('', 'ㅇ'),
    'ㅇ': ('ㅇ', 'ㅇ'),
}

# Final -> (what stays behind, palatalized onset) before 이
PALATALIZED = {'ㄷ': ('', 'ㅈ'), 'ㅌ': ('', 'ㅊ'), 'ㄾ': ('ㄹ', 'ㅊ')}

ASPIRATED = {'ㄱ': 'ㅋ', 'ㄷ': 'ㅌ', 'ㅈ': 'ㅊ'}
H_FINALS = {'ㅎ': '', 'ㄶ': 'ㄴ', 'ㅀ': 'ㄹ'}
NASALIZED = {'ㄱ': 'ㅇ', 'ㄷ': 'ㄴ', 'ㅂ': 'ㅁ'}

# Codas that keep a following plain stop voiced (McCune-Reischauer)
VOICED_CODAS = {'', 'ㄴ', 'ㄹ', 'ㅁ', 'ㅇ'}

SCHEMES = {
    'revised': {
        'initials': {
            'ㄱ': 'g', 'ㄲ': 'kk', 'ㄴ': 'n', 'ㄷ': 'd', 'ㄸ': 'tt', 'ㄹ': 'r',
            'ㅁ': 'm', 'ㅂ': 'b', 'ㅃ': 'pp', 'ㅅ': 's', 'ㅆ': 'ss', 'ㅇ': '',
            'ㅈ': 'j', 'ㅉ': 'jj', 'ㅊ': 'ch', 'ㅋ': 'k', 'ㅌ': 't', 'ㅍ': 'p', 'ㅎ': 'h',
        },
        'voiced': {},
        'medials': [
            'a', 'ae', 'ya', 'yae', 'eo', 'e', 'yeo', 'ye', 'o', 'wa', 'wae',
            'oe', 'yo', 'u', 'wo', 'we', 'wi', 'yu', 'eu', 'ui', 'i'
        ],
        'finals': {'ㄱ': 'k', 'ㄴ': 'n', 'ㄷ': 't', 'ㄹ': 'l', 'ㅁ': 'm', 'ㅂ': 'p', 'ㅇ': 'ng'},
        'palatal_s': False,
    },
    'mccune-reischauer': {
        'initials': {
            'ㄱ': 'k', 'ㄲ': 'kk', 'ㄴ': 'n', 'ㄷ': 't', 'ㄸ': 'tt', 'ㄹ': 'r',
            'ㅁ': 'm', 'ㅂ': 'p', 'ㅃ': 'pp', 'ㅅ': 's', 'ㅆ': 'ss', 'ㅇ': '',
            'ㅈ': 'ch', 'ㅉ': 'tch', 'ㅊ': "ch'", 'ㅋ': "k'", 'ㅌ': "t'", 'ㅍ': "p'", 'ㅎ': 'h',
        },
        'voiced': {'ㄱ': 'g', 'ㄷ': 'd', 'ㅂ': 'b', 'ㅈ': 'j'},
        'medials': [
            'a', 'ae', 'ya', 'yae', 'ŏ', 'e', 'yŏ', 'ye', 'o', 'wa', 'wae',
            'oe', 'yo', 'u', 'wŏ', 'we', 'wi', 'yu', 'ŭ', 'ŭi', 'i'
        ],
        'finals': {'ㄱ': 'k', 'ㄴ': 'n', 'ㄷ': 't', 'ㄹ': 'l', 'ㅁ': 'm', 'ㅂ': 'p', 'ㅇ': 'ng'},
        'palatal_s': True,
    },
}


def decompose(ch: str) -> tuple[str, str, str] | None:
    """Split a Hangul syllable into (initial, medial, final) jamo."""
    code = ord(ch) - HANGUL_SYLLABLE_FIRST
    if not 0 <= code < SYLLABLE_COUNT:
        return None
    return INITIALS[code // 588], MEDIALS[(code % 588) // 28], FINALS[code % 28]


def apply_boundary(final: str, initial: str, medial: str = '') -> tuple[str, str]:
    """Resolve the sound change between a final and the next syllable's initial.

    `medial` is the vowel of the next syllable, needed for palatalization.
    Returns (coda, onset): the coda as one of the seven neutral sounds (or ''
    when nothing is left), and the onset as an initial jamo.
    """
    if not final:
        return '', initial
    if medial == 'ㅣ':
        if initial == 'ㅇ' and final in PALATALIZED:
            return PALATALIZED[final]
        if initial == 'ㅎ' and final == 'ㄷ':
            return '', 'ㅊ'
    if initial == 'ㅇ':
        return LIAISON.get(final, ('', final))
    if final in H_FINALS:
        if initial in ASPIRATED:
            return H_FINALS[final], ASPIRATED[initial]
        if initial == 'ㄴ':
            return ('ㄹ', 'ㄹ') if final == 'ㅀ' else ('ㄴ', 'ㄴ')
    sound = NEUTRAL_FINALS[final]
    if initial in ('ㄴ', 'ㅁ'):
        if sound in NASALIZED:
            return NASALIZED[sound], initial
        if sound == 'ㄹ' and initial == 'ㄴ':
            return 'ㄹ', 'ㄹ'
        return sound, initial
    if initial == 'ㄹ':
        if sound in ('ㄹ', 'ㄴ'):
            return 'ㄹ', 'ㄹ'
        return NASALIZED.get(sound, sound), 'ㄴ'
    return sound, initial


class HangulRomanizer(Romanizer):
    """Romanizes Hangul into every configured scheme."""

    def __init__(self, schemes: tuple = ROMANIZATION_SCHEMES):
        unknown = [s for s in schemes if s not in SCHEMES]
        if unknown:
            raise ValueError(f"Unknown romanization scheme(s): {', '.join(unknown)}")
        if not schemes:
            raise ValueError("At least one romanization scheme is required")
        self.schemes = tuple(schemes)

    def romanize(self, word: str) -> list[str]:
        return [self.transliterate(word, scheme) for scheme in self.schemes]

    def transliterate(self, word: str, scheme: str) -> str:
        """Romanize a word in a single scheme. Non-Hangul characters pass through."""
        table = SCHEMES[scheme]
        parts = [decompose(ch) for ch in word]
        onsets = [p[0] if p else None for p in parts]
        codas = [NEUTRAL_FINALS.get(p[2], '') if p else None for p in parts]

        for i in range(len(parts) - 1):
            if parts[i] and parts[i + 1]:
                codas[i], onsets[i + 1] = apply_boundary(parts[i][2], onsets[i + 1], parts[i + 1][1])

        pieces = []
        for i, ch in enumerate(word):
            if parts[i] is None:
                pieces.append(ch)
                continue
            medial = parts[i][1]
            prev_coda = codas[i - 1] if i > 0 else None
            pieces.append(self._onset(table, onsets[i], prev_coda, medial))
            pieces.append(table['medials'][MEDIALS.index(medial)])
            pieces.append(table['finals'].get(codas[i], ''))
        return ''.join(pieces)

    @staticmethod
    def _onset(table: dict, initial: str, prev_coda: str | None, medial: str) -> str:
        """Spell an initial, given the coda before it (None at a word start)."""
        if initial == 'ㄹ':
            return 'l' if prev_coda == 'ㄹ' else 'r'
        if initial == 'ㅅ' and table['palatal_s'] and medial in ('ㅣ', 'ㅟ'):
            return 'sh'
        if prev_coda is not None and prev_coda in VOICED_CODAS and initial in table['voiced']:
            return table['voiced'][initial]
        return table['initials'][initial]
