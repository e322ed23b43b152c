"""Liturgical rotation table: pure content lookup for weekly themes.

No database, no I/O: only the fixed theme cycle, the sparse per-day
scripture table and the policy that falls back to a default verse.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterator, List, Optional, Tuple

from ..core.clock import DAY_TITLES


@dataclass(frozen=True)
class ThemeDescriptor:
    season: str
    title: str
    description: str


@dataclass(frozen=True)
class Scripture:
    reference: str
    text: str
    prompt: str


@dataclass(frozen=True)
class DailyScripture:
    """Resolved scripture for one day, tagged with whether the fallback was used."""

    day_of_week: int
    day_title: str
    scripture: Scripture
    is_fallback: bool


@dataclass(frozen=True)
class PlannedWeek:
    """One week of the rotation laid out on the calendar."""

    index: int
    week_start: date
    descriptor: ThemeDescriptor
    season_key: str
    days: Tuple[DailyScripture, ...]


FALLBACK_SCRIPTURE = Scripture(
    reference="Psalm 46:10",
    text="Be still, and know that I am God.",
    prompt="In stillness, what do you notice? What is God saying to you?",
)

LITURGICAL_THEMES: Tuple[ThemeDescriptor, ...] = (
    ThemeDescriptor(
        "Advent",
        "The Weight I'm Carrying",
        "In the stillness before Christmas, we pause to feel what we've been holding. What burdens do we carry? What waits to be laid down?",
    ),
    ThemeDescriptor(
        "Advent",
        "Watching in the Dark",
        "Advent teaches us to wait. To keep watch. To trust even when we cannot see what's coming.",
    ),
    ThemeDescriptor(
        "Advent",
        "Breath Before the Promise",
        "As we near Christmas, we breathe. We pause. We make space for the holy to arrive.",
    ),
    ThemeDescriptor(
        "Advent",
        "Opening Our Hands",
        "Advent invites us to open our hands—to receive, to let go, to become vessels.",
    ),
    ThemeDescriptor(
        "Christmas",
        "The Incarnate Touch",
        "God became flesh. Born. Vulnerable. Held in human hands. What does it mean that the Divine entered our bodies?",
    ),
    ThemeDescriptor(
        "Christmas",
        "Joy Embodied",
        "Christmas is a somatic feast. We celebrate with bodies—with warmth, with music, with embrace.",
    ),
    ThemeDescriptor(
        "Epiphany",
        "The Star We Follow",
        "Epiphany calls us to follow the light. To notice what guides us. To journey toward the holy.",
    ),
    ThemeDescriptor(
        "Epiphany",
        "Manifestation of Light",
        "God is revealed. The Light becomes visible. We see what was hidden.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "The Everyday Sacred",
        "In ordinary time, we discover that the sacred lives in the everyday. In breath, in rest, in presence.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "Growth and Becoming",
        "Like seeds in soil, we grow. We become. We trust the slow work of grace.",
    ),
    ThemeDescriptor(
        "Lent",
        "The Journey Inward",
        "Lent invites us to turn toward our inner wilderness. To face what we've avoided. To find Christ there.",
    ),
    ThemeDescriptor(
        "Lent",
        "Desert Compassion",
        "In the desert of Lent, we strip away distractions. We meet ourselves honestly. We meet Christ.",
    ),
    ThemeDescriptor(
        "Lent",
        "Dying to Self",
        "Lent asks: What must die in us? What habits, fears, false selves must we release?",
    ),
    ThemeDescriptor(
        "Lent",
        "The Long Road to Resurrection",
        "As we approach Easter, we walk with Christ toward the cross. We practice surrender. We trust.",
    ),
    ThemeDescriptor(
        "Holy Week",
        "The Passion of the Body",
        "Holy Week is visceral. We follow Christ through suffering. We feel the weight of the cross.",
    ),
    ThemeDescriptor(
        "Holy Week",
        "The Stillness of Holy Saturday",
        "In the tomb with Christ, we rest. We wait. We trust the resurrection.",
    ),
    ThemeDescriptor(
        "Easter",
        "Resurrection Body",
        "Christ rises bodily. The Resurrection is not escape from the body, but transformation of it.",
    ),
    ThemeDescriptor(
        "Easter",
        "New Life Breaking Through",
        "Easter bursts forth. New life erupts. We celebrate resurrection in every form.",
    ),
    ThemeDescriptor(
        "Easter",
        "The Risen Christ Appears",
        "The Risen Christ appears to us—in breaking bread, in wounds transformed, in presence.",
    ),
    ThemeDescriptor(
        "Easter",
        "Ascension and Presence",
        "Christ ascends, yet remains. God's presence is both transcendent and intimate.",
    ),
    ThemeDescriptor(
        "Pentecost",
        "The Spirit's Fire",
        "Pentecost sets us ablaze. The Holy Spirit falls. We are filled. We are sent.",
    ),
    ThemeDescriptor(
        "Pentecost",
        "The Breath of God",
        "Ruach. Wind. Breath. The Holy Spirit moves through us, animating, vivifying.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "The Kingdom Among Us",
        "In ordinary time after Pentecost, we live as the kingdom. We embody Christ's love.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "Bearing Fruit",
        "As branches on the vine, we bear fruit. Love, joy, peace, patience—the fruits of the Spirit.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "The Fruit of the Spirit",
        "Galatians 5: Love, joy, peace, patience, kindness, goodness, faithfulness, gentleness, self-control.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "Feeding the Hungry",
        "Christ in the hungry, thirsty, stranger, naked, sick, imprisoned. We see Him in the other.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "Welcoming the Stranger",
        "Hospitality is a spiritual practice. We welcome Christ in the stranger.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "Healing Hands",
        "Jesus healed with touch. His hands were instruments of wholeness. We are called to heal.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "The Teacher's Wisdom",
        "We sit at Jesus's feet and learn. His teachings reorient our bodies, our minds, our hearts.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "Following the Way",
        "Jesus called us to follow. Not just intellectually, but with our bodies, our time, our love.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "Prayer and Presence",
        "Prayer is the breath of the spiritual life. In prayer, we meet God face to face.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "The Beatitudes",
        "Blessed are the poor, mourning, meek, hungry, merciful, pure, peacemakers, persecuted.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "The Greatest Commandment",
        "Love the Lord your God with all your heart, soul, mind. Love your neighbor as yourself.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "Sabbath Rest",
        "God rested on the seventh day. We are invited to rest, to cease, to remember.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "The Cross Daily",
        "We take up our cross daily. We practice dying to self. We follow.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "Community and Communion",
        "We are not alone. We gather. We break bread. We become the body of Christ.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "The Incarnational Life",
        "The Word became flesh. We too live incarnationally—spirit and body, together.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "Grace and Forgiveness",
        "By grace we are saved. In grace, we forgive ourselves and others.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "The Presence of Christ",
        "Christ is present—in the Eucharist, in community, in the poor, in our own hearts.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "Mercy and Justice",
        "God desires mercy. We are called to do justice and love kindness.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "Hope in Darkness",
        "Even in darkness, Christ is light. Even in despair, hope remains.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "Faith and Doubt",
        "Faith doesn't mean certainty. We believe even in uncertainty, even in doubt.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "The Resurrection Daily",
        "Each day is a resurrection. Each morning, Christ's power breaks through death.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "The Love of God",
        "Nothing can separate us from the love of God. We are loved. Completely. Always.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "The Generous Heart",
        "God gave freely. We give freely. Generosity is spiritual practice.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "The Singing Life",
        "Joy and music mark the spiritual life. We sing even in sorrow.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "Beauty and Wonder",
        "Creation sings of God's glory. We too are called to create, to wonder, to delight.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "The Contemplative Heart",
        "We pause. We observe. We listen. We become aware of God's presence.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "Service and Humility",
        "Christ washed feet. We serve. We become last so that others can be first.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "The Beloved Community",
        "We are family in Christ. We love as brothers and sisters. We belong.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "All Saints' Communion",
        "We are surrounded by a great cloud of witnesses. We join the communion of saints.",
    ),
    ThemeDescriptor(
        "Ordinary Time",
        "The End and the Beginning",
        "All things end. All things begin anew. Christ is alpha and omega.",
    ),
)

# Keyed by "{season}-{ordinal of the week within that season}", then day (0=Sunday).
# Most season keys are absent on purpose; those weeks use FALLBACK_SCRIPTURE.
DAILY_SCRIPTURES: Dict[str, Dict[int, Scripture]] = {
    "Advent-1": {
        0: Scripture(
            "Isaiah 2:1-5",
            "In the last days, the mountain of the Lord's temple will be established as the highest of the mountains. All nations will stream to it.",
            "What mountains in your life are being leveled? What height is calling to you?",
        ),
        1: Scripture(
            "Romans 13:11-14",
            "The night is nearly over; the day is almost here. So let us put aside the deeds of darkness and put on the armor of light.",
            "What deeds of darkness are ready to be released? What light are you stepping toward?",
        ),
        2: Scripture(
            "Matthew 24:37-44",
            "As it was in the days of Noah, so it will be at the coming of the Son of Man.",
            "In the midst of ordinary life, are you watching? Are you awake?",
        ),
        3: Scripture(
            "Luke 21:25-36",
            "There will be signs in the sun, moon and stars. On earth, nations will be in anguish and perplexity.",
            "What signs are you noticing? What perplexities are you holding?",
        ),
        4: Scripture(
            "Psalm 25:1-10",
            "To you, O Lord, I lift up my soul. In you I trust. Show me your ways and teach me your paths.",
            "Lift your soul with the psalmist. What ways is God showing you?",
        ),
        5: Scripture(
            "1 Corinthians 1:3-9",
            "As you wait for our Lord Jesus Christ to be revealed, he will keep you firm to the end.",
            "What does it feel like to be held firm by God's grace?",
        ),
        6: Scripture(
            "Philippians 1:3-11",
            "I am confident of this: that he who began a good work in you will carry it on to completion.",
            "What good work is God beginning in you? Can you sense it stirring?",
        ),
    },
}


def season_key(season: str, ordinal: int) -> str:
    """Build the scripture table key, e.g. ``("Advent", 1) -> "Advent-1"``."""
    return f"{season}-{ordinal}"


def season_keys(themes: Tuple[ThemeDescriptor, ...] = LITURGICAL_THEMES) -> List[str]:
    """Season key for every theme, numbering weeks 1.. within each season.

    A season that recurs later in the cycle keeps counting, so the second
    stretch of Ordinary Time continues from where the first one stopped.
    """
    counts: Dict[str, int] = {}
    keys = []
    for descriptor in themes:
        counts[descriptor.season] = counts.get(descriptor.season, 0) + 1
        keys.append(season_key(descriptor.season, counts[descriptor.season]))
    return keys


def find_scripture(key: str, day_of_week: int) -> Optional[Scripture]:
    """Exact two-level lookup; None when the season key or the day is missing."""
    return DAILY_SCRIPTURES.get(key, {}).get(day_of_week)


def scripture_for(key: str, day_of_week: int) -> DailyScripture:
    """Resolve scripture for one day, substituting the fallback verse when absent.

    Raises:
        ValueError: If day_of_week is outside 0..6.
    """
    if not 0 <= day_of_week <= 6:
        raise ValueError(f"day_of_week must be 0..6, got {day_of_week}")

    found = find_scripture(key, day_of_week)
    return DailyScripture(
        day_of_week=day_of_week,
        day_title=DAY_TITLES[day_of_week],
        scripture=found or FALLBACK_SCRIPTURE,
        is_fallback=found is None,
    )


def plan_rotation(
    start: date, themes: Tuple[ThemeDescriptor, ...] = LITURGICAL_THEMES
) -> Iterator[PlannedWeek]:
    """Lay the theme cycle out week by week from *start*.

    Args:
        start: Week start for the first theme; week i begins start + 7*i days.
        themes: Ordered theme descriptors.

    Yields:
        PlannedWeek for each descriptor with all seven days resolved.
    """
    for index, (descriptor, key) in enumerate(zip(themes, season_keys(themes))):
        yield PlannedWeek(
            index=index,
            week_start=start + timedelta(days=7 * index),
            descriptor=descriptor,
            season_key=key,
            days=tuple(scripture_for(key, day) for day in range(7)),
        )
