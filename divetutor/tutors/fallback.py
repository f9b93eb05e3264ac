"""Deterministic, offline tutor responder.

Used when the generative backend cannot be reached. Answers come from an
ordered table of keyword rules: rules scoped to the tutor's discipline are
checked before generic rules, and the first rule whose keywords appear in the
lower-cased message wins. Messages matching no rule get an encouraging
follow-up inviting a more specific question.
"""

import logging
import random
from dataclasses import dataclass

from divetutor.models.persona import Persona

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FallbackRule:
    """A keyword predicate paired with a response template.

    Templates may reference {name}, {discipline} and {specialty}.
    """

    name: str
    keywords: tuple[str, ...]
    template: str
    discipline: str | None = None

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)

    def applies_to(self, scopes: set[str]) -> bool:
        return self.discipline is None or self.discipline.lower() in scopes


DISCIPLINE_RULES: tuple[FallbackRule, ...] = (
    # NDT
    FallbackRule(
        name="ndt-corrosion",
        discipline="NDT",
        keywords=("corrosion", "galvanic", "cathodic", "anode", "rust"),
        template=(
            "Corrosion assessment is at the heart of underwater inspection. Galvanic "
            "corrosion develops where dissimilar metals are electrically connected in "
            "seawater: the less noble metal becomes the anode and is consumed. Cathodic "
            "protection counters this with sacrificial anodes or impressed current, and we "
            "verify it with potential readings against a reference electrode and by "
            "estimating anode depletion. Which part of a cathodic protection survey would "
            "you like to go through?"
        ),
    ),
    FallbackRule(
        name="ndt-ultrasonic",
        discipline="NDT",
        keywords=("ultrasonic", "thickness", "ut gauge", "wall loss", "sound wave"),
        template=(
            "Ultrasonic thickness gauging sends sound pulses through the material and times "
            "the back-wall echo. Always calibrate your gauge on a reference block in the same "
            "medium you will be testing, because water changes the readings. Record each "
            "reading against its location so wall loss can be trended between inspections."
        ),
    ),
    FallbackRule(
        name="ndt-methods",
        discipline="NDT",
        keywords=("magnetic particle", "mpi", "crack", "penetrant", "eddy current", "weld"),
        template=(
            "For surface and near-surface cracking, magnetic particle inspection is the "
            "workhorse underwater, with eddy current useful through coatings. Visual "
            "inspection always comes first: NDT methods confirm what we already suspect. "
            "As {name}, I would ask which structure and defect type you are dealing with."
        ),
    ),
    # LST
    FallbackRule(
        name="lst-gas",
        discipline="LST",
        keywords=("gas", "mix", "oxygen", "heliox", "analy", "contamination"),
        template=(
            "Gas management is a Life Support Technician's core duty. Analyse every supply "
            "before it goes online, label and log it, and double-check oxygen percentages "
            "against the dive plan. Contamination prevention starts with clean fittings and "
            "verified compressor intake locations. What gas procedure should we walk through?"
        ),
    ),
    FallbackRule(
        name="lst-chamber",
        discipline="LST",
        keywords=("chamber", "hyperbaric", "compression", "lock"),
        template=(
            "Running a hyperbaric chamber safely comes down to disciplined checklists: "
            "pre-pressurisation checks, continuous atmosphere monitoring, and clear "
            "communication with the occupants at every stage. Which part of chamber "
            "operation would you like to review?"
        ),
    ),
    # ALST
    FallbackRule(
        name="alst-saturation",
        discipline="ALST",
        keywords=("saturation", "sat ", "bell", "living chamber", "deep"),
        template=(
            "Saturation diving keeps divers at storage depth for days, so life support must "
            "control oxygen partial pressure, CO2 scrubbing, temperature and humidity around "
            "the clock. Redundancy in every critical system is non-negotiable. Which "
            "saturation system would you like to explore?"
        ),
    ),
    FallbackRule(
        name="alst-decompression",
        discipline="ALST",
        keywords=("decompression", "decompress", "bleed", "ascent"),
        template=(
            "Saturation decompression is slow and continuous, following the approved table "
            "with planned holds. In an emergency decompression, the procedure and the "
            "supervisor's instructions govern every step. What scenario should we discuss?"
        ),
    ),
    # DMT
    FallbackRule(
        name="dmt-dcs",
        discipline="DMT",
        keywords=("decompression sickness", "dcs", "bends", "embolism"),
        template=(
            "Suspected decompression sickness or arterial gas embolism is an emergency: "
            "give high-flow oxygen, run a neurological assessment, and arrange recompression "
            "without delay. Document the dive profile and symptom onset times for the "
            "diving medical specialist. What presentation would you like to work through?"
        ),
    ),
    FallbackRule(
        name="dmt-assessment",
        discipline="DMT",
        keywords=("abcde", "assessment", "patient", "casualty", "narcosis", "first aid"),
        template=(
            "Start every casualty with the ABCDE approach: airway, breathing, circulation, "
            "disability, exposure. It keeps you systematic under pressure and makes sure "
            "nothing life-threatening is missed. Which step would you like me to expand on?"
        ),
    ),
    # Commercial Dive Supervisor
    FallbackRule(
        name="supervisor-planning",
        discipline="Commercial Dive Supervisor",
        keywords=("risk assessment", "planning", "dive plan", "briefing", "job hazard", "permit"),
        template=(
            "Risk assessment isn't just a checklist, it is a mindset. Plan the operation, "
            "identify the hazards, set the controls, and make the pre-dive briefing count: "
            "every team member should know the plan and the contingencies. What operation "
            "are you planning?"
        ),
    ),
    FallbackRule(
        name="supervisor-team",
        discipline="Commercial Dive Supervisor",
        keywords=("team", "communicat", "leader", "crew", "incident"),
        template=(
            "Clear communication protocols make or break a dive operation. Use standard "
            "commands, confirm every instruction, and keep the whole crew informed. When "
            "something goes wrong: stay calm, communicate clearly, execute the plan."
        ),
    ),
)

GENERIC_RULES: tuple[FallbackRule, ...] = (
    FallbackRule(
        name="help",
        keywords=("help", "explain"),
        template=(
            "I'd be happy to help! As your {discipline} tutor specialising in {specialty}, "
            "here's where I would start: tell me which procedure or concept is giving you "
            "trouble and we will break it down step by step."
        ),
    ),
    FallbackRule(
        name="emergency",
        keywords=("emergency", "danger"),
        template=(
            "Emergency situations require immediate, methodical response. Remember your "
            "training: assess the situation, ensure safety, then act decisively. What "
            "specific emergency scenario would you like to discuss?"
        ),
    ),
    FallbackRule(
        name="equipment",
        keywords=("equipment", "tool"),
        template=(
            "Equipment knowledge is crucial for safety and efficiency. Each tool has its "
            "specific purpose and limitations. What equipment would you like to learn more "
            "about?"
        ),
    ),
    FallbackRule(
        name="safety",
        keywords=("safety", "risk"),
        template=(
            "Safety is paramount in our field. Every procedure, every decision, every action "
            "should be evaluated through the lens of risk management. What safety concern "
            "can I help address?"
        ),
    ),
)

DEFAULT_RULES: tuple[FallbackRule, ...] = DISCIPLINE_RULES + GENERIC_RULES

ENCOURAGING_TEMPLATES: tuple[str, ...] = (
    "That's a great question! Let me share my experience with that topic in {discipline}.",
    "I appreciate your curiosity. In my years of experience in {discipline}, I've found "
    "that the fundamentals matter most.",
    "Excellent thinking! This is exactly the kind of question that shows you're developing "
    "professional judgment in {discipline}.",
    "Your question demonstrates good awareness. Here's what I've learned over the years "
    "in {discipline}.",
)

FOLLOW_UP = (
    " Feel free to ask me more specific questions about the {discipline} techniques and "
    "procedures we're covering."
)


class FallbackResponder:
    """Produces discipline-flavored answers from local keyword rules only."""

    def __init__(
        self,
        rules: tuple[FallbackRule, ...] = DEFAULT_RULES,
        encouragements: tuple[str, ...] = ENCOURAGING_TEMPLATES,
        rng: random.Random | None = None,
    ):
        if not encouragements:
            raise ValueError("encouragements must not be empty")
        # Discipline-scoped rules always take precedence over generic ones
        self._rules = tuple(r for r in rules if r.discipline) + tuple(
            r for r in rules if not r.discipline
        )
        self._encouragements = encouragements
        self._rng = rng or random.Random()

    @property
    def rules(self) -> tuple[FallbackRule, ...]:
        return self._rules

    def match(self, persona: Persona, message: str | None, discipline_key: str | None = None):
        """Return the first rule matching the message for this tutor, or None."""
        text = str(message).lower() if message else ""
        scopes = {persona.discipline.lower()}
        if discipline_key:
            scopes.add(discipline_key.lower())
        for rule in self._rules:
            if rule.applies_to(scopes) and rule.matches(text):
                return rule
        return None

    def respond(
        self,
        persona: Persona,
        message: str | None,
        discipline_key: str | None = None,
    ) -> str:
        """Answer a message without any network access. Never raises."""
        fields = {
            "name": persona.display_name or "your tutor",
            "discipline": persona.discipline,
            "specialty": persona.specialty_label or persona.discipline,
        }
        rule = self.match(persona, message, discipline_key)
        if rule is not None:
            logger.debug("Fallback rule %s matched for %s", rule.name, persona.id)
            return rule.template.format(**fields)

        template = self._rng.choice(self._encouragements)
        return (template + FOLLOW_UP).format(**fields)
