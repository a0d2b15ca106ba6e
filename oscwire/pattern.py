"""OSC address pattern matching.

Supported syntax:
  *        zero or more characters
  ?        any single character
  [set]    any character in the set, ranges written a-z
  [!set]   any character not in the set
  {a,b,c}  any of the comma separated alternatives
"""

from __future__ import annotations

_NEGATE = "!"


def pattern_match(string: str, pattern: str) -> bool:
    """Return True if ``string`` matches the OSC address ``pattern``."""
    return _match(string, 0, pattern, 0)


def _match(s: str, si: int, p: str, pi: int) -> bool:
    def sc(i: int) -> str:
        return s[i] if 0 <= i < len(s) else ""

    def pc(i: int) -> str:
        return p[i] if 0 <= i < len(p) else ""

    while pc(pi):
        if not sc(si) and pc(pi) != "*":
            return False

        c = p[pi]
        pi += 1

        if c == "*":
            while pc(pi) == "*":
                pi += 1
            if not pc(pi):
                return True
            if pc(pi) not in ("?", "[", "{"):
                while sc(si) and pc(pi) != sc(si):
                    si += 1
            while sc(si):
                if _match(s, si, p, pi):
                    return True
                si += 1
            return False

        if c == "?":
            if not sc(si):
                return False

        elif c == "[":
            negate = pc(pi) == _NEGATE
            if negate:
                pi += 1
            matched = False
            current = sc(si)
            while not matched:
                c = pc(pi)
                pi += 1
                if not c:
                    break
                if not pc(pi):
                    return False
                if pc(pi) == "-":
                    pi += 1
                    if not pc(pi):
                        return False
                    upper = pc(pi)
                    if upper != "]":
                        if current == c or current == upper or c < current < upper:
                            matched = True
                    else:
                        if current >= c:
                            matched = True
                        break
                else:
                    if c == current:
                        matched = True
                    if pc(pi) != "]":
                        if pc(pi) == current:
                            matched = True
                    else:
                        break
            if negate == matched:
                return False
            while pc(pi) and pc(pi) != "]":
                pi += 1
            if not pc(pi):
                return False
            pi += 1

        elif c == "{":
            place = si
            remainder = pi
            while pc(remainder) and pc(remainder) != "}":
                remainder += 1
            if not pc(remainder):
                return False
            remainder += 1

            c = pc(pi)
            pi += 1
            while c:
                if c == ",":
                    if _match(s, si, p, remainder):
                        return True
                    si = place
                    if not pc(pi):
                        return False
                    pi += 1
                elif c == "}":
                    if not pc(pi) and not sc(si):
                        return True
                    si -= 1  # compensated by the advance below
                    break
                elif c == sc(si):
                    si += 1
                    if not sc(si) and pc(remainder):
                        return False
                else:
                    si = place
                    while pc(pi) and pc(pi) not in (",", "}"):
                        pi += 1
                    if pc(pi) == ",":
                        pi += 1
                    elif pc(pi) == "}":
                        return False
                c = pc(pi)
                pi += 1

        elif c != sc(si):
            return False

        si += 1

    return not sc(si)