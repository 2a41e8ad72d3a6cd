"""Consejos generales y bloque de derivación a profesionales."""

from __future__ import annotations

from salud_tips.model import AdviceItem

GENERAL_ADVICE: tuple[AdviceItem, ...] = (
    AdviceItem(
        icon="💧",
        title="Hydration Potion",
        body=(
            "Drink at least 8 glasses of water daily. Dehydration is a sneaky "
            "debuff that lowers energy, focus, and physical performance!"
        ),
    ),
    AdviceItem(
        icon="🥦",
        title="Eat the Rainbow",
        body=(
            "Fill your plate with colourful fruits and vegetables. Each colour "
            "gives different stat boosts — vitamins, minerals, and antioxidants!"
        ),
    ),
    AdviceItem(
        icon="🚶",
        title="10K Steps Quest",
        body=(
            "Aim for 10,000 steps a day. Walking is the easiest grind in the "
            "game — it boosts mood, burns calories, and strengthens your heart."
        ),
    ),
    AdviceItem(
        icon="🧘",
        title="Meditation Skill",
        body=(
            "Even 5 minutes of deep breathing or mindfulness can reduce stress, "
            "improve focus, and lower your heart rate. A powerful passive ability!"
        ),
    ),
    AdviceItem(
        icon="📵",
        title="Screen Break Buff",
        body=(
            "Every 20 minutes, look at something 20 feet away for 20 seconds (the "
            "20-20-20 rule). Protects your eye stats from screen damage!"
        ),
    ),
    AdviceItem(
        icon="🏋️",
        title="Strength Training",
        body=(
            "Include strength exercises 2-3 times per week. Building muscle boosts "
            "metabolism, protects joints, and increases your base power stat!"
        ),
    ),
)

PROFESSIONAL_REFERRAL = AdviceItem(
    icon="🩺",
    title="Visit the Healer's Guild",
    body=(
        "These tips are general guidance — for personalised medical advice, "
        "always consult a professional healer (doctor)! Visit our alliance "
        "partners:"
    ),
)

PARTNER_LINKS: tuple[tuple[str, str], ...] = (
    ("Health Direct", "https://www.healthdirect.gov.au/australian-health-services"),
    ("National Telemedicine Doctors", "https://www.nationaltelemedicinedoctors.com/"),
)
