"""Amount formatting for receipts: English words and Indian digit grouping."""
from decimal import Decimal, ROUND_HALF_UP

ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
TEENS = ["Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen",
         "Sixteen", "Seventeen", "Eighteen", "Nineteen"]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

# greedy base-1000 expansion stops at thousands
MAX_WORDS_VALUE = 1_000_000


def _below_thousand(n: int) -> list:
    words = []
    if n >= 100:
        words += [ONES[n // 100], "Hundred"]
        n %= 100
    if n >= 20:
        words.append(TENS[n // 10])
        n %= 10
    elif n >= 10:
        words.append(TEENS[n - 10])
        n = 0
    if n:
        words.append(ONES[n])
    return words


def number_to_words(n: int) -> str:
    """Spell out a whole number in English, e.g. 1234 -> 'One Thousand Two Hundred Thirty Four'.

    Raises ValueError for negative numbers and for values of a million or more.
    """
    if n < 0:
        raise ValueError("negative amounts cannot be spelled out")
    if n >= MAX_WORDS_VALUE:
        raise ValueError(f"amount {n} is too large to spell out")
    if n == 0:
        return "Zero"
    thousands, rest = divmod(n, 1000)
    words = []
    if thousands:
        words += _below_thousand(thousands) + ["Thousand"]
    words += _below_thousand(rest)
    return " ".join(words)


def amount_to_words(amount) -> str:
    """Receipt wording for an amount: amount_to_words(1000) == 'One Thousand Only'.

    Only whole amounts are supported; anything with paise raises ValueError.
    """
    if isinstance(amount, bool):
        raise ValueError("amount must be a number")
    value = Decimal(str(amount))
    if not value.is_finite():
        raise ValueError("amount must be a finite number")
    if value != value.to_integral_value():
        raise ValueError("fractional amounts cannot be spelled out")
    return f"{number_to_words(int(value))} Only"


def format_inr(amount) -> str:
    """Format with Indian digit grouping and two decimals: 1234567.5 -> '12,34,567.50'."""
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    whole, frac = f"{abs(value):.2f}".split(".")
    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return sign + ",".join(groups + [tail]) + "." + frac
