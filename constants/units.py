"""
Unit Constants

Dutch unit spellings recognised by the ingredient parser and the
fraction tables used for parsing and display.
"""

# Unit mappings for ingredient parsing (lowercase input -> stored unit)
UNIT_MAPPINGS = {
    'gram': 'g', 'gr': 'g', 'g': 'g',
    'kilo': 'kg', 'kilogram': 'kg', 'kg': 'kg',
    'milliliter': 'ml', 'ml': 'ml',
    'deciliter': 'dl', 'dl': 'dl',
    'liter': 'l', 'l': 'l',
    'eetlepel': 'el', 'eetlepels': 'el', 'el': 'el',
    'theelepel': 'tl', 'theelepels': 'tl', 'tl': 'tl',
    'kopje': 'kop', 'kopjes': 'kop', 'kop': 'kop',
    'stuk': 'stuk', 'stuks': 'stuk',
    'teen': 'teen', 'teentje': 'teen', 'teentjes': 'teen', 'tenen': 'teen',
    'bosje': 'bosje', 'bosjes': 'bosje', 'bos': 'bosje',
    'blik': 'blik', 'blikje': 'blik', 'blikjes': 'blik',
    'pak': 'pak', 'pakje': 'pak', 'pakjes': 'pak',
    'zakje': 'zakje', 'zakjes': 'zakje',
    'plak': 'plak', 'plakken': 'plak', 'plakjes': 'plak',
    'snuf': 'snuf', 'snufje': 'snuf',
    'takje': 'takje', 'takjes': 'takje',
}

# Unit used when a line has a number but no recognised unit ("2 uien")
DEFAULT_COUNT_UNIT = 'stuk'

# Common fractions for display (using precise values)
COMMON_FRACTIONS = {
    0.125: '1/8', 0.25: '1/4', 1/3: '1/3', 0.375: '3/8',
    0.5: '1/2', 0.625: '5/8', 2/3: '2/3', 0.75: '3/4', 0.875: '7/8'
}

# Unicode fraction characters mapping
UNICODE_FRACTIONS = {
    '\u00bd': 0.5,    # ½
    '\u2153': 1/3,    # ⅓
    '\u2154': 2/3,    # ⅔
    '\u00bc': 0.25,   # ¼
    '\u00be': 0.75,   # ¾
    '\u215b': 0.125,  # ⅛
    '\u215c': 0.375,  # ⅜
    '\u215d': 0.625,  # ⅝
    '\u215e': 0.875,  # ⅞
}
