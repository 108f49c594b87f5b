"""
Word lists and keyword rules used by the classifier and the brand reports.

Everything here is plain data so that tests (and deployments) can swap in their
own vocabulary through `load_lexicons` without touching code.

Rules are nested terms matched against lower-cased text:
  "word"               substring match
  [r1, r2, ...]        any of
  {"all": [r1, r2]}    all of
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import yaml

logger = logging.getLogger(__name__)

Rule = Union[str, list, tuple, dict]


def _words(block: str) -> Tuple[str, ...]:
    return tuple(block.split())


# ----------------------------
# Classifier vocabulary
# ----------------------------
HIRING_PHRASES = ("hiring", "looking for", "join our team")
COMPLAINT_PHRASES = ("complaint", "unreliable", "poor service")
POSITIVE_OVERRIDES = ("proud", "excited", "thrilled")

STRONG_POSITIVE = _words("""proud excited amazing love fantastic wonderful incredible thrilled delighted
grateful blessed honored celebrating achievement success growth milestone breakthrough""")
MODERATE_POSITIVE = _words("""great excellent good best happy pleased satisfied impressed recommend enjoy
appreciate thankful welcome congratulations""")
STRONG_NEGATIVE = _words("""disappointed frustrated angry terrible awful worst hate disgusted upset annoyed
failed problem issue complaint unreliable poor bad wrong mistake error broken unacceptable""")
MODERATE_NEGATIVE = _words("""concerned worried troubled difficult challenging struggle delay late slow
expensive overpriced confused unclear""")
BUSINESS = _words("""hiring looking announcement update news information details company team position
role job career business startup funding investment partnership collaboration""")

# ----------------------------
# Keyword extraction
# ----------------------------
STOP_WORDS = frozenset("""the and or but in on at to for of with by is are was were be been have has had do
does did will would could should may might can this that these those a an i you he she it we they me him
her us them""".split())

# verbs, fillers, competitor/brand names and domain nouns that crowd out real praise words
BRAND_STOP_WORDS = frozenset("""my your his its our their from just like get got go went come came see saw
know knew think thought take took make made give gave say said tell told ask asked work worked use used find
found try tried call called look looked want wanted need needed feel felt become became leave left put mean
meant keep kept let begin began seem seemed help helped talk talked turn turned start started show showed
hear heard play played run ran move moved live lived believe believed hold held bring brought happen happened
write wrote provide provided sit sat stand stood lose lost pay paid meet met include included continue
continued set learn learned change changed lead led understand understood watch watched follow followed stop
stopped create created speak spoke read allow allowed add added spend spent grow grew open opened walk walked
win won offer offered remember remembered love loved consider considered appear appeared buy bought wait
waited serve served die died send sent expect expected build built stay stayed fall fell cut reach reached
kill killed remain remained suggest suggested raise raised pass passed sell sold require required report
reported decide decided pull pulled shoffr uber ola blusmart bangalore delhi india company startup business
team service customer experience ride taxi cab driver car vehicle app booking airport time day week month
year today yesterday tomorrow morning evening night""".split())

NEGATIVE_VOCABULARY = frozenset("""bad poor terrible awful horrible worst hate disappointed frustrated
unreliable failed cancelled late dirty rude unprofessional expensive overpriced unacceptable problem issue
complaint broken slow unresponsive annoying frustrating disappointing unpleasant unsatisfactory inadequate
incompetent careless negligent unhelpful unfriendly aggressive hostile disgusting filthy smelly uncomfortable
unsafe dangerous risky scary nightmare disaster chaos mess confusion delayed postponed missed ignored rejected
denied refused blocked restricted limited incomplete defective faulty malfunctioning glitchy buggy crashed
frozen stuck overcharged billed charged cost price rip-off scam fraud deception misleading false fake phony
bogus""".split())

COMMON_NEGATIVE_WORDS = ("Bad", "Poor", "Terrible", "Awful", "Horrible", "Worst", "Hate", "Disappointed")

# ----------------------------
# Brand report filters
# ----------------------------
EXPERIENCE_TERMS = _words("experience ride service customer tried used booked trip journey")
POSITIVE_EXPERIENCE_TERMS = _words("""good great excellent love amazing proud satisfied happy recommend
fantastic wonderful reliable""")
NEGATIVE_EXPERIENCE_TERMS = _words("""bad poor terrible unreliable disappointed problem issue complaint failed
unacceptable frustrated""")
POSITIVE_BRAND_TERMS = POSITIVE_EXPERIENCE_TERMS + (
    "clean", "comfortable", "professional", "on time", "punctual", "smooth",
)
NEGATIVE_BRAND_TERMS = NEGATIVE_EXPERIENCE_TERMS + _words("""worst awful horrible hate cancelled late dirty rude
unprofessional expensive""")

_VEHICLE = ["car", "vehicle"]
_VEHICLE_PRAISE = ["clean", "comfortable", "luxury", "premium", "well maintained", "spotless", "new", "modern",
                   "electric"]

FEEDBACK_CATEGORIES: Dict[str, Rule] = {
    "Customer Service": ["service", "support", "customer", "helpful", "responsive", "care", "assistance",
                         "attention"],
    "Overall Experience": ["experience", "journey", "ride", "trip", "overall", "amazing", "wonderful", "fantastic",
                           "excellent", "seamless", "smooth"],
    "App Usability": ["app", "booking", "easy", "simple", "convenient", "smooth", "user friendly", "interface",
                      "platform"],
    "Vehicle Condition": {"all": [_VEHICLE, _VEHICLE_PRAISE]},
    "On-Time Pickup": ["time", "punctual", "schedule", "on time", "early", "arrived", "timely", "prompt"],
    "Safety & Reliability": ["safe", "safety", "secure", "reliable", "trust", "dependable", "peace of mind"],
    "Driver Professionalism": {"all": ["driver", ["professional", "courteous", "friendly", "polite", "helpful",
                                                  "experienced", "skilled", "well trained"]]},
    "Value for Money": ["price", "cost", "affordable", "value", "worth", "reasonable", "fair", "competitive"],
}

PROBLEM_AREAS: Dict[str, Rule] = {
    "Reliability Issues": ["unreliable", "cancelled", "no show", "failed", "didn't arrive", "missed"],
    "Service Quality": ["poor", "bad service", "terrible", "awful", "horrible", "worst"],
    "Communication Problems": ["no response", "customer service", "support", "unresponsive", "ignored",
                               "no reply"],
    "Pricing Issues": ["expensive", "overpriced", "cost", "price", "charge", "billing"],
    "Technical Problems": {"all": ["app", ["bug", "error", "crash", "glitch", "slow", "unresponsive"]]},
}

PRAISE_RULES: Dict[str, Rule] = {
    "driver": {"all": ["driver", ["professional", "friendly", "courteous", "helpful", "experienced", "skilled",
                                  "good", "great", "excellent"]]},
    "wait_time": {"all": ["time", ["on time", "punctual", "early", "arrived", "timely", "prompt"]]},
    "vehicle": {"all": [_VEHICLE, _VEHICLE_PRAISE]},
    "app": {"all": ["app", ["easy", "simple", "convenient", "smooth", "user friendly", "interface", "booking",
                            "platform"]]},
}

COMPLAINT_RULES: Dict[str, Rule] = {
    "driver": {"all": ["driver", ["rude", "unprofessional", "bad", "poor", "terrible", "awful", "late",
                                  "cancelled", "no show"]]},
    "wait_time": {"all": ["time", ["late", "delay", "wait", "cancelled", "no show", "unreliable"]]},
    "vehicle": {"all": [_VEHICLE, ["dirty", "old", "broken", "uncomfortable", "smelly", "poor condition"]]},
    "app": {"all": ["app", ["bug", "glitch", "error", "crash", "slow", "unresponsive",
                            {"all": ["booking", ["failed", "problem"]]}]]},
}


@dataclass(frozen=True)
class Lexicons:
    hiring_phrases: Tuple[str, ...] = HIRING_PHRASES
    complaint_phrases: Tuple[str, ...] = COMPLAINT_PHRASES
    positive_overrides: Tuple[str, ...] = POSITIVE_OVERRIDES
    strong_positive: Tuple[str, ...] = STRONG_POSITIVE
    moderate_positive: Tuple[str, ...] = MODERATE_POSITIVE
    strong_negative: Tuple[str, ...] = STRONG_NEGATIVE
    moderate_negative: Tuple[str, ...] = MODERATE_NEGATIVE
    business: Tuple[str, ...] = BUSINESS
    stop_words: frozenset = STOP_WORDS
    brand_stop_words: frozenset = BRAND_STOP_WORDS
    negative_vocabulary: frozenset = NEGATIVE_VOCABULARY
    common_negative_words: Tuple[str, ...] = COMMON_NEGATIVE_WORDS
    brand: str = "shoffr"
    experience_terms: Tuple[str, ...] = EXPERIENCE_TERMS
    positive_experience_terms: Tuple[str, ...] = POSITIVE_EXPERIENCE_TERMS
    negative_experience_terms: Tuple[str, ...] = NEGATIVE_EXPERIENCE_TERMS
    positive_brand_terms: Tuple[str, ...] = POSITIVE_BRAND_TERMS
    negative_brand_terms: Tuple[str, ...] = NEGATIVE_BRAND_TERMS
    feedback_categories: Dict[str, Rule] = field(default_factory=lambda: dict(FEEDBACK_CATEGORIES))
    problem_areas: Dict[str, Rule] = field(default_factory=lambda: dict(PROBLEM_AREAS))
    praise_rules: Dict[str, Rule] = field(default_factory=lambda: dict(PRAISE_RULES))
    complaint_rules: Dict[str, Rule] = field(default_factory=lambda: dict(COMPLAINT_RULES))


DEFAULT_LEXICONS = Lexicons()

# shown as-is on the dashboard, never matched directly
DISPLAY_FIELDS = frozenset({"common_negative_words"})


def matches(text: str, rule: Rule) -> bool:
    """Evaluate a keyword rule against already lower-cased text."""
    if isinstance(rule, str):
        return rule in text
    if isinstance(rule, dict):
        return all(matches(text, part) for part in rule.get("all", ()))
    return any(matches(text, part) for part in rule)


def count_hits(text: str, words) -> int:
    """Number of distinct words that occur at least once as a substring."""
    return sum(1 for w in words if w in text)


def _coerce(name: str, value: Any, current: Any) -> Any:
    if name == "brand":
        return str(value).strip().lower()
    if isinstance(current, (frozenset, tuple)) and not isinstance(value, (list, tuple)):
        raise ValueError(f"Lexicon '{name}' must be a list, got {type(value).__name__}")
    if isinstance(current, frozenset):
        return frozenset(str(v).lower() for v in value)
    if name in DISPLAY_FIELDS:
        return tuple(str(v) for v in value)
    if isinstance(current, tuple):
        # matched against lower-cased text
        return tuple(str(v).lower() for v in value)
    if isinstance(current, dict):
        if not isinstance(value, dict):
            raise ValueError(f"Lexicon '{name}' must be a mapping, got {type(value).__name__}")
        return dict(value)
    return str(value)


def load_lexicons(path: Path | str | None = None, *, brand: str | None = None) -> Lexicons:
    """
    Build a Lexicons instance, overriding defaults with the fields found in a
    YAML file (keys are Lexicons field names). Unknown keys are rejected.
    """
    lex = DEFAULT_LEXICONS
    if path:
        raw = Path(path).read_text(encoding="utf-8")
        data = yaml.safe_load(raw) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Lexicon file {path} must contain a mapping at top level")
        known = {f.name for f in dataclasses.fields(Lexicons)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown lexicon keys in {path}: {unknown}")
        overrides = {k: _coerce(k, v, getattr(lex, k)) for k, v in data.items()}
        lex = dataclasses.replace(lex, **overrides)
        logger.info("Loaded %d lexicon override(s) from %s", len(overrides), path)
    if brand:
        lex = dataclasses.replace(lex, brand=brand.lower())
    return lex
