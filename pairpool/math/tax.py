"""Transfer-tax arithmetic.

A taxed transfer of `amount` withholds floor(amount * tax_bps / 10000), so
the recipient receives `amount - floor(amount * tax_bps / 10000)`, which is
ceil(amount * (10000 - tax_bps) / 10000). That received amount is
non-decreasing in `amount`, so the cheapest amount that delivers a target can
be found from the proportional estimate with a couple of unit steps.
"""

from pairpool.math.safe_int import S

BPS = 10_000


def tax_of(amount: int, tax_bps: int) -> int:
    """Tax withheld from a transfer of `amount`."""
    return (S(amount) * tax_bps // BPS).value


def net_of_tax(amount: int, tax_bps: int) -> int:
    """Amount a recipient receives when `amount` is sent."""
    return amount - tax_of(amount, tax_bps)


def gross_of_tax(net: int, tax_bps: int) -> int:
    """Smallest amount to send so the recipient receives at least `net`.

    Examples at 2%:
        gross_of_tax(100, 200) == 102        # 102 - 2 = 100
        gross_of_tax(10**20, 200) == 10**22 // 98
    """
    if not 0 <= tax_bps < BPS:
        raise ValueError(f"tax_bps must be in [0, {BPS}), got {tax_bps}")
    if net <= 0:
        return 0
    if tax_bps == 0:
        return net

    gross = (S(net) * BPS // (BPS - tax_bps)).value
    while net_of_tax(gross, tax_bps) < net:
        gross += 1
    while gross > net and net_of_tax(gross - 1, tax_bps) >= net:
        gross -= 1
    return gross
