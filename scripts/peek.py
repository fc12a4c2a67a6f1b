import sys

from oncall.nicknames import DEFAULT_NICKNAMES
from oncall.resolver import find_candidates
from oncall.utils import display_label
from oncall.vcards import parse_vcards

# usage: python scripts/peek.py contacts.vcf [First Last]
text = open(sys.argv[1], encoding='utf-8', errors='ignore').read()
contacts = parse_vcards(text)
for c in contacts:
    print('Parsed:', display_label(c), [p.value for p in c.phone_numbers])

if len(sys.argv) > 2:
    first, _, last = sys.argv[2].partition(' ')
    tier, found = find_candidates(first, last, contacts, DEFAULT_NICKNAMES)
    print('Tier:', tier.value if tier else None)
    for c in found:
        print('  ', display_label(c))
