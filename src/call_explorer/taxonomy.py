"""Fixed disposition taxonomy and keyword stop-words."""

from types import MappingProxyType

# category -> member dispositions (exact, case-sensitive labels)
CATEGORY_TAXONOMY = MappingProxyType({
    "No Contact": ("cancelled", "No Answer", "no answer"),
    "Voicemail": ("Left Voicemail", "went to voicemail"),
    "Connected - Feedback": (
        "Answered - Connected - Business Has Not Started Yet",
        "Answered - Connected - Enjoys Found",
    ),
    "Connected - Questions": (
        "Answered - Connected - Feature Exploration/Request",
        "Answered - Connected - Funding Questions",
        "Answered - Connected - Credit / Lending Interest",
        "Answered - Connected - No Questions",
        "Answered - Connected - Integration (3rd Party) Questions",
        "Answered - Provided Found Overview",
    ),
    "Connected - Technical": (
        "Answered - Connected - Activation Issues",
        "Answered - Connected - Technical Issues",
    ),
    "Wrong Contact": (
        "Answered - Wrong Person, Gave Referral",
        "Answered - Wrong Person, No Referral",
        "Wrong Phone #",
    ),
    "Busy/DNC": (
        "Busy Call Later / Send Follow Up",
        "Do Not Disturb - DNC",
        "Busy - Call Later",
        "Hook Rejected",
    ),
    "Other": ("No Disposition",),
})

KNOWN_DISPOSITIONS = frozenset(d for members in CATEGORY_TAXONOMY.values() for d in members)

STOP_WORDS = frozenset("""
a an the and or but is in on at to for with by of that this it as be are was were
will would could should can may might must has have had do does did
i you he she they we their our your my his her its
""".split())


def category_of(disposition):
    """First category listing `disposition`, or None when it is unmapped."""
    for category, members in CATEGORY_TAXONOMY.items():
        if disposition in members:
            return category
    return None
