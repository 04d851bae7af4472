import secrets

UINT32 = 0xFFFFFFFF
TWO_POW_32 = 4294967296

BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def _utf16_units(text):
    data = text.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(data[i : i + 2], "little") for i in range(0, len(data), 2)]


def hash_seed(seed_str):
    """Hash a seed string to an unsigned 32-bit integer.

    Works on UTF-16 code units so the same string hashes identically to the
    editor, which derives seeds from JavaScript strings.
    """
    h = 0xDEADBEEF
    for unit in _utf16_units(seed_str):
        h = ((h ^ unit) * 2654435761) & UINT32
    return (h ^ (h >> 16)) & UINT32


def random_seed(length=7):
    """Fresh base36 seed for unseeded palette generation."""
    return "".join(secrets.choice(BASE36_ALPHABET) for _ in range(length))


class SeededRandom:
    """Linear congruential generator driven by a string seed.

    The sequence for a given seed string must never change: palette ids and
    variant ids are derived from it.
    """

    def __init__(self, seed_str):
        self.seed = hash_seed(seed_str)

    def next(self):
        """Return a float in [0, 1)."""
        self.seed = (self.seed * 1664525 + 1013904223) % TWO_POW_32
        return self.seed / TWO_POW_32

    def range(self, lo, hi):
        return lo + self.next() * (hi - lo)

    def choice(self, items):
        if not items:
            raise IndexError("cannot choose from an empty sequence")
        index = min(int(self.next() * len(items)), len(items) - 1)
        return items[index]

    def weighted(self, options):
        """Pick a key from (key, weight) pairs using a single draw.

        Weights are walked in the order given; the last key absorbs any
        floating point remainder.
        """
        if not options:
            raise IndexError("cannot choose from an empty sequence")
        total = sum(weight for _, weight in options)
        roll = self.next() * total
        cumulative = 0.0
        for key, weight in options:
            cumulative += weight
            if roll < cumulative:
                return key
        return options[-1][0]

    def base36(self, length=7):
        return "".join(self.choice(BASE36_ALPHABET) for _ in range(length))
