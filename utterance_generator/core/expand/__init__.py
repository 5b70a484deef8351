"""Template expansion engine.

A phrase template mixes plain words with alternation groups such as
``(rock|jazz)``, optional groups such as ``(|the)`` and slot groups such as
``{(one|two)|PartySize}``. The expander resolves the leftmost group first and
re-scans every branch until only plain words remain, so the output order is
fully determined by the template.
"""
