"""Fixed bilingual texts of the "About us" page."""

from typing import Any

from feuerwehr.services.localization import Locale

ABOUT_TEXTS: dict[Locale, dict[str, Any]] = {
    "de": {
        "title": "Wer wir sind",
        "breadcrumb": "Über uns",
        "badge": "Unsere Feuerwehr",
        "hero_subtitle": "Gemeinsam für die Sicherheit in Droß – Tag und Nacht im Einsatz.",
        "highlights": [
            ("24/7", "Bereit für den Einsatz"),
            ("100%", "Ehrenamtliches Engagement"),
        ],
        "intro_title": "Feuerwehr Droß – mehr als nur Einsätze",
        "intro": [
            "Wir sind eine freiwillige Feuerwehr, die tief in der Gemeinde verwurzelt ist. "
            "Unsere Mitglieder sind Nachbarn, Freunde und Kolleginnen und Kollegen aus allen "
            "Lebensbereichen – vereint durch das Ziel, Menschen zu helfen.",
            "Ob Brandbekämpfung, technische Hilfeleistung oder Präventionsarbeit: Wir stehen "
            "bereit, wenn wir gebraucht werden. Ausbildung, Kameradschaft und Professionalität "
            "bilden das Fundament unserer Arbeit.",
        ],
        "mission_title": "Unser Auftrag",
        "mission_points": [
            "Schutz von Leben, Gesundheit und Eigentum der Bevölkerung",
            "Schnelle und professionelle Hilfe in Not- und Gefahrensituationen",
            "Laufende Aus- und Weiterbildung unserer Kameradinnen und Kameraden",
            "Stärkung des Sicherheitsbewusstseins in der Gemeinde",
        ],
        "values_title": "Werte, die uns leiten",
        "values": [
            (
                "Kameradschaft",
                "Wir vertrauen einander – im Einsatz und darüber hinaus. "
                "Zusammenhalt ist unsere größte Stärke.",
            ),
            (
                "Professionalität",
                "Regelmäßige Übungen, moderne Ausrüstung und klare Abläufe sorgen dafür, "
                "dass jeder Handgriff sitzt.",
            ),
            (
                "Ehrenamt",
                "Unser Einsatz ist freiwillig, unsere Verantwortung groß. "
                "Wir engagieren uns aus Überzeugung für unsere Gemeinde.",
            ),
        ],
        "people_title": "Die Menschen hinter der Uniform",
        "people_text": (
            "Hinter jeder Uniform steckt eine Persönlichkeit: vom Jugendlichen in der "
            "Feuerwehrjugend bis zur erfahrenen Führungskraft. Was uns verbindet, ist die "
            "Bereitschaft, im Ernstfall füreinander und für andere da zu sein."
        ),
        "stats": [
            ("+50", "Jahre im Dienst der Bevölkerung"),
            ("30+", "aktive Mitglieder"),
            ("10+", "Jugendmitglieder"),
        ],
        "history_title": "Erfahren Sie mehr über unsere Geschichte",
        "history_text": (
            "Entdecken Sie die reiche Geschichte der Freiwilligen Feuerwehr Droß "
            "von 1883 bis heute."
        ),
        "history_link": "Zur Geschichte",
    },
    "en": {
        "title": "Who we are",
        "breadcrumb": "About us",
        "badge": "Our fire brigade",
        "hero_subtitle": "Together for the safety of Droß – on duty day and night.",
        "highlights": [
            ("24/7", "Ready to respond"),
            ("100%", "Voluntary commitment"),
        ],
        "intro_title": "Fire Brigade Droß – more than just operations",
        "intro": [
            "We are a volunteer fire brigade deeply rooted in our community. Our members are "
            "neighbours, friends and colleagues from all walks of life – united by the goal "
            "of helping people.",
            "Whether firefighting, technical assistance or prevention work: we are ready "
            "whenever we are needed. Training, camaraderie and professionalism are the "
            "foundation of our work.",
        ],
        "mission_title": "Our mission",
        "mission_points": [
            "Protecting lives, health and property in our community",
            "Providing fast and professional help in emergencies",
            "Ongoing training and development for all members",
            "Strengthening safety awareness among citizens",
        ],
        "values_title": "Values that guide us",
        "values": [
            (
                "Camaraderie",
                "We rely on each other – during operations and beyond. "
                "Our strongest asset is our team spirit.",
            ),
            (
                "Professionalism",
                "Regular training, modern equipment and clear procedures ensure "
                "that every move counts.",
            ),
            (
                "Volunteer service",
                "Our work is voluntary, our responsibility is great. "
                "We serve our community out of conviction.",
            ),
        ],
        "people_title": "The people behind the uniform",
        "people_text": (
            "Behind every uniform is a person: from youth members to experienced officers. "
            "What unites us is the willingness to be there for others when it matters most."
        ),
        "stats": [
            ("+50", "years serving the community"),
            ("30+", "active members"),
            ("10+", "youth members"),
        ],
        "history_title": "Learn more about our history",
        "history_text": "Discover the rich history of the Droß Volunteer Fire Department from 1883 to today.",
        "history_link": "View History",
    },
}


def about_text(locale: Locale) -> dict[str, Any]:
    return ABOUT_TEXTS[locale]
