from decimal import Decimal

from fx_consolidator import AggregatingLoader

loader = AggregatingLoader()

# USD-pivot rates: 1 CHF buys 0.9 USD, 1 EUR buys 1.1 USD
loader.register_exchange_rate("CHF/USD", Decimal("0.9"))
loader.register_exchange_rate("EUR/USD", Decimal("1.1"))

lines = [
    "Company Code\tAccount\tCost Center\tPeriod\tText\tCurrency\tAmount",
    "C1\tx\ty\tz\tw\tCHF\t100.00",
    "C1\tx\ty\tz\tw\tCHF\t200.00",
    "C2\tx\ty\tz\tw\tEUR\t50.00",
]

records = loader.load({}, lines)
for key, record in records.items():
    print(key, record.amount.quantize(Decimal("0.01")))
# => C1/x/y/z/w 122.73
# => C2/x/y/z/w 50.00

print(loader.report)

# Absent input is distinguished from empty input
print(loader.load({}, None))  # None
print(loader.load({}, []))  # {}
