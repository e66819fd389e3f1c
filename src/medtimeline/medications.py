"""Shipped medication catalog seed data.

Declaration order is matching precedence: combination products (Percocet)
are declared before their single-ingredient counterparts (Oxycodone).
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from .catalog import ActiveDuration, CatalogEntry, Ingredient, StandardDose
from .extractors import FirstOf, FixedDoseExtractor, PatternExtractor

# Theme assignments per medication family
THEMES: Mapping[str, str] = MappingProxyType({
    "acetaminophen": "green",
    "adderall": "orange",
    "alcohol": "burgundy",
    "aleve": "red",
    "cambia": "jade",
    "cannabis": "forest",
    "celebrex": "purple",
    "clonazepam": "royalBlue",
    "covid_vaccine": "cyan",
    "dextroamphetamine": "orangeRed",
    "diclofenac": "teal",
    "emgality": "supreme",
    "famotidine": "pink",
    "flexeril": "tan",
    "flu_vaccine": "cyan",
    "gabapentin": "yellow",
    "gaviscon": "jade",
    "hep_vaccine": "cyan",
    "loratadine": "pink",
    "miralax": "teal",
    "mucinex": "forest",
    "omega3": "yellow",
    "ondansetron": "blue",
    "oxycodone": "orange",
    "percocet": "orange",
    "propranolol": "royalBlue",
    "qelbree": "jade",
    "rizatriptan": "tan",
    "sudafed": "red",
    "tramadol": "blue",
    "valium": "royalBlue",
    "vyvanse": "yellow",
    "xanax": "cyan",
    "xywav": "purple",
})

_NUMBER = r"\d+(?:\.\d+)?"


def _strength(names: str, unit: str = "mg", suffix: str = "mg") -> PatternExtractor:
    """``<name> <n>mg`` style extractor, e.g. ``Celebrex 200mg``."""
    return PatternExtractor([rf"(?:{names})\s*(?P<amount>{_NUMBER}){suffix}"], unit=unit)


def _doses(unit: str, *amounts: float, label_suffix: str | None = None) -> tuple[StandardDose, ...]:
    suffix = unit if label_suffix is None else label_suffix
    return tuple(StandardDose(amount=a, unit=unit, label=f"{a:g}{suffix}") for a in amounts)


def _percocet(strength: int) -> CatalogEntry:
    product = rf"Percocet {strength}[-/]325"
    return CatalogEntry(
        id=f"percocet_{strength}_325",
        display_name=f"Percocet {strength}/325",
        patterns=[product, rf"{strength}[-/]325 Percocet"],
        extractor=PatternExtractor(
            [
                rf"{product}.*?\((?P<count>\d+) (?:tablets?|pills?)\)",
                rf"(?P<count>\d+)x\s*{product}",
                rf"Percocet (?P<count>\d+)x {strength}[-/]325",
                product,
                rf"{strength}[-/]325 Percocet",
            ],
            unit="mg oxy",
            per_unit=strength,
        ),
        active_duration=ActiveDuration(
            typical=4,
            min=3,
            max=6,
            half_life=3.2,
            notes="Duration based on oxycodone immediate release",
            citations=("https://www.ncbi.nlm.nih.gov/books/NBK482226/",),
        ),
        ingredients=(
            Ingredient(name="oxycodone", amount_per_unit=strength, unit="mg"),
            Ingredient(name="acetaminophen", amount_per_unit=325, unit="mg"),
        ),
        standard_doses=(
            StandardDose(amount=strength, unit="mg oxy", label="1 tablet"),
            StandardDose(amount=strength * 2, unit="mg oxy", label="2 tablets"),
        ),
        theme=THEMES["percocet"],
    )


MEDICATIONS: tuple[CatalogEntry, ...] = (
    # Pain management
    CatalogEntry(
        id="acetaminophen_8hr",
        display_name="Acetaminophen 8hr",
        patterns=[r"Acetaminophen 8hr", r"Tylenol.*8hr"],
        extractor=FirstOf((
            PatternExtractor(
                [
                    r"Acetaminophen 8hr Extended Release.*?\((?P<amount>\d+)mg acetaminophen\)",
                    r"Acetaminophen 8hr Extended Release \(Tylenol\).*?(?P<amount>\d+)mg",
                ],
                unit="mg",
            ),
            PatternExtractor(
                [r"Acetaminophen 8hr.*?\((?P<count>\d+) tablets?\)"],
                unit="mg",
                per_unit=650,
            ),
        )),
        active_duration=ActiveDuration(
            typical=8,
            min=6,
            max=8,
            half_life=3.4,
            notes="Extended release formulation designed for q8hr dosing",
            citations=("https://pmc.ncbi.nlm.nih.gov/articles/PMC6084333/",),
        ),
        ingredients=(Ingredient(name="acetaminophen", amount_per_unit=650, unit="mg"),),
        standard_doses=(
            StandardDose(amount=650, unit="mg", label="1 tablet"),
            StandardDose(amount=1300, unit="mg", label="2 tablets"),
            StandardDose(amount=1950, unit="mg", label="3 tablets"),
        ),
        theme=THEMES["acetaminophen"],
    ),
    _percocet(5),
    _percocet(10),
    CatalogEntry(
        id="oxycodone",
        display_name="Oxycodone",
        patterns=[r"Oxycodone"],
        extractor=PatternExtractor([r"Oxycodone.*?(?P<amount>\d+)mg"], unit="mg"),
        active_duration=ActiveDuration(typical=4, min=3, max=6, half_life=3.2),
        ingredients=(Ingredient(name="oxycodone", amount_per_unit=5, unit="mg"),),
        standard_doses=_doses("mg", 5),
        theme=THEMES["oxycodone"],
    ),
    CatalogEntry(
        id="tramadol",
        display_name="Tramadol",
        patterns=[r"Tramadol"],
        extractor=PatternExtractor(
            [
                r"Tramadol.*?(?P<amount>\d+)mg.*?\((?P<count>\d+) tablets?\)",
                r"Tramadol.*?(?P<amount>\d+)mg",
            ],
            unit="mg",
        ),
        active_duration=ActiveDuration(
            typical=6,
            min=4,
            max=6,
            half_life=6.3,
            notes="Active metabolite (M1) has longer half-life of 7.4 hours",
        ),
        standard_doses=(
            StandardDose(amount=50, unit="mg", label="1 tablet"),
            StandardDose(amount=100, unit="mg", label="2 tablets"),
        ),
        theme=THEMES["tramadol"],
    ),
    # Anti-inflammatory
    CatalogEntry(
        id="celebrex",
        display_name="Celebrex",
        patterns=[r"Celebrex"],
        extractor=_strength("Celebrex"),
        active_duration=ActiveDuration(typical=12, half_life=11.2),
        standard_doses=_doses("mg", 100, 200),
        theme=THEMES["celebrex"],
    ),
    CatalogEntry(
        id="naproxen",
        display_name="Aleve",
        patterns=[r"Aleve", r"Naproxen"],
        extractor=FirstOf((
            _strength("Aleve|Naproxen"),
            FixedDoseExtractor([r"Aleve"], amount=220, unit="mg"),
        )),
        active_duration=ActiveDuration(typical=12, half_life=13),
        standard_doses=(
            StandardDose(amount=220, unit="mg", label="1 tablet"),
            StandardDose(amount=440, unit="mg", label="2 tablets"),
            StandardDose(amount=660, unit="mg", label="3 tablets"),
        ),
        theme=THEMES["aleve"],
    ),
    # Migraine
    CatalogEntry(
        id="rizatriptan",
        display_name="Rizatriptan",
        patterns=[r"Rizatriptan", r"Maxalt"],
        extractor=_strength("Rizatriptan"),
        active_duration=ActiveDuration(
            typical=2,
            notes="Rapid onset triptan; redose possible after 2 hours if needed",
        ),
        standard_doses=_doses("mg", 10),
        theme=THEMES["rizatriptan"],
    ),
    CatalogEntry(
        id="cambia",
        display_name="Cambia",
        patterns=[r"Cambia"],
        extractor=_strength("Cambia"),
        active_duration=ActiveDuration(typical=2),
        standard_doses=_doses("mg", 50),
        theme=THEMES["cambia"],
    ),
    CatalogEntry(
        id="emgality",
        display_name="Emgality",
        patterns=[r"Emgality", r"galcanezumab"],
        extractor=_strength("Emgality"),
        standard_doses=(StandardDose(amount=120, unit="mg", label="120mg injection"),),
        theme=THEMES["emgality"],
    ),
    CatalogEntry(
        id="propranolol",
        display_name="Propranolol",
        patterns=[r"Propranolol"],
        extractor=_strength("Propranolol"),
        active_duration=ActiveDuration(typical=24, half_life=4),
        standard_doses=_doses("mg", 20),
        theme=THEMES["propranolol"],
    ),
    # ADHD
    CatalogEntry(
        id="adderall",
        display_name="Adderall",
        patterns=[r"Adderall"],
        extractor=_strength("Adderall"),
        active_duration=ActiveDuration(typical=4, min=4, max=6),
        standard_doses=_doses("mg", 2.5, 5, 7.5, 10, 15, 20),
        theme=THEMES["adderall"],
    ),
    CatalogEntry(
        id="dextroamphetamine",
        display_name="Dextroamphetamine",
        patterns=[r"Dextroamphetamine"],
        extractor=_strength("Dextroamphetamine"),
        active_duration=ActiveDuration(typical=4, min=4, max=6),
        standard_doses=_doses("mg", 2.5, 5, 7.5, 10, 15, 20),
        theme=THEMES["dextroamphetamine"],
    ),
    CatalogEntry(
        id="vyvanse",
        display_name="Vyvanse",
        patterns=[r"Vyvanse"],
        extractor=_strength("Vyvanse"),
        active_duration=ActiveDuration(typical=12, min=10, max=14),
        standard_doses=_doses("mg", 10, 20, 30, 40, 50, 60),
        theme=THEMES["vyvanse"],
    ),
    CatalogEntry(
        id="qelbree",
        display_name="Qelbree",
        patterns=[r"Qelbree"],
        extractor=_strength("Qelbree"),
        standard_doses=_doses("mg", 100),
        theme=THEMES["qelbree"],
    ),
    # Anxiety / sleep
    CatalogEntry(
        id="xanax",
        display_name="Xanax",
        patterns=[r"Xanax"],
        extractor=_strength("Xanax"),
        active_duration=ActiveDuration(typical=6, half_life=11.2),
        standard_doses=_doses("mg", 0.25, 0.375, 0.625),
        theme=THEMES["xanax"],
    ),
    CatalogEntry(
        id="clonazepam",
        display_name="Clonazepam",
        patterns=[r"Clonazepam", r"Klonopin", r"Klonipin"],
        extractor=PatternExtractor(
            [
                r"Clonazepam\s*(?P<amount>\d*\.?\d+)mg?\s*\((?P<count>\d+(?:/\d+)?)\s*tablets?\)",
                r"Clonazepam\s*(?P<amount>\d*\.?\d+)\s*\((?P<count>\d+)\s*tablets?\)",
                r"Clonazepam\s*(?P<amount>\d*\.?\d+)",
            ],
            unit="mg",
        ),
        active_duration=ActiveDuration(typical=12, min=8, max=12, half_life=35),
        standard_doses=_doses("mg", 0.25, 0.5, 1, 1.5),
        theme=THEMES["clonazepam"],
    ),
    CatalogEntry(
        id="valium_suppository",
        display_name="Valium Suppository",
        patterns=[r"Valium.*Suppository"],
        extractor=PatternExtractor([r"Valium.*?(?P<amount>\d+)/\d+/\d+mg"], unit="mg diazepam"),
        standard_doses=(StandardDose(amount=5, unit="mg diazepam", label="5/5/26mg"),),
        theme=THEMES["valium"],
    ),
    CatalogEntry(
        id="xywav",
        display_name="Xywav",
        patterns=[r"Xywav"],
        extractor=PatternExtractor(
            [
                rf"(?P<amount>{_NUMBER})g\s+Xywav",
                rf"Xywav.*?(?P<amount>{_NUMBER})g",
            ],
            unit="g",
        ),
        active_duration=ActiveDuration(typical=3, min=2.5, max=4, half_life=0.5),
        standard_doses=_doses("g", 0.5, 0.75, 1, 1.5, 2, 2.5, 3, 3.5, 4, 4.5, 5),
        theme=THEMES["xywav"],
    ),
    CatalogEntry(
        id="cannabis",
        display_name="Cannabis",
        patterns=[r"Cannabis", r"Marijuana"],
        extractor=PatternExtractor(
            [
                r"Cannabis\s*(?P<amount>\d+)mg\s*THC",
                r"Marijuana.*?(?P<amount>\d+)mg\s*THC",
                r"(?P<amount>\d+)mg\s*THC.*?(?:Cannabis|Marijuana)",
            ],
            unit="mg THC",
        ),
        active_duration=ActiveDuration(typical=4, min=2, max=6),
        standard_doses=_doses("mg THC", 5, 10, 15, 20, 25, 30),
        theme=THEMES["cannabis"],
    ),
    # Nausea / GI
    CatalogEntry(
        id="ondansetron",
        display_name="Zofran",
        patterns=[r"Zofran", r"Ondansetron"],
        extractor=PatternExtractor(
            [
                r"(?:Zofran|Ondansetron).*?(?P<amount>\d+)mg.*?\((?P<count>\d+) tablets?\)",
                r"(?:Zofran|Ondansetron).*?(?P<amount>\d+)mg",
            ],
            unit="mg",
        ),
        active_duration=ActiveDuration(typical=8, min=4, max=8, half_life=3.5),
        standard_doses=_doses("mg", 4, 8, 16),
        theme=THEMES["ondansetron"],
    ),
    CatalogEntry(
        id="famotidine",
        display_name="Famotidine",
        patterns=[r"Famotidine"],
        extractor=_strength("Famotidine"),
        active_duration=ActiveDuration(typical=24, half_life=3),
        standard_doses=_doses("mg", 20),
        theme=THEMES["famotidine"],
    ),
    CatalogEntry(
        id="gaviscon",
        display_name="Gaviscon",
        patterns=[r"Gaviscon"],
        extractor=FixedDoseExtractor([r"Gaviscon"], amount=1, unit="dose"),
        active_duration=ActiveDuration(typical=4),
        standard_doses=(StandardDose(amount=1, unit="dose", label="2-4 tsp"),),
        theme=THEMES["gaviscon"],
    ),
    CatalogEntry(
        id="miralax",
        display_name="Miralax",
        patterns=[r"Miralax"],
        extractor=_strength("Miralax", unit="g", suffix="g"),
        standard_doses=(StandardDose(amount=34, unit="g", label="34g (2 capfuls)"),),
        theme=THEMES["miralax"],
    ),
    # Muscle relaxants / topical / nerve pain
    CatalogEntry(
        id="flexeril",
        display_name="Flexeril",
        patterns=[r"Flexeril"],
        extractor=_strength("Flexeril"),
        active_duration=ActiveDuration(typical=8, half_life=18),
        standard_doses=_doses("mg", 5),
        theme=THEMES["flexeril"],
    ),
    CatalogEntry(
        id="diclofenac",
        display_name="Diclofenac Gel",
        patterns=[r"Diclofenac"],
        extractor=FixedDoseExtractor([r"Diclofenac"], amount=1, unit="application"),
        standard_doses=(StandardDose(amount=1, unit="application", label="1 application"),),
        theme=THEMES["diclofenac"],
    ),
    CatalogEntry(
        id="gabapentin",
        display_name="Gabapentin",
        patterns=[r"Gabapentin", r"Neurontin"],
        extractor=_strength("Gabapentin"),
        active_duration=ActiveDuration(typical=8, min=5, max=8, half_life=6),
        standard_doses=(
            StandardDose(amount=300, unit="mg", label="1 capsule"),
            StandardDose(amount=600, unit="mg", label="2 capsules"),
        ),
        theme=THEMES["gabapentin"],
    ),
    # Cold / allergy
    CatalogEntry(
        id="sudafed",
        display_name="Sudafed",
        patterns=[r"Sudafed"],
        extractor=PatternExtractor([r"Sudafed.*?(?P<amount>\d+)mg"], unit="mg"),
        standard_doses=_doses("mg", 10),
        theme=THEMES["sudafed"],
    ),
    CatalogEntry(
        id="loratadine",
        display_name="Loratadine",
        patterns=[r"Loratadine", r"Loratidine", r"Claritin"],
        extractor=_strength("Loratadine|Loratidine|Claritin"),
        active_duration=ActiveDuration(typical=24, half_life=8),
        standard_doses=_doses("mg", 10),
        theme=THEMES["loratadine"],
    ),
    CatalogEntry(
        id="mucinex",
        display_name="Mucinex",
        patterns=[r"Mucinex", r"guaifenesin"],
        extractor=PatternExtractor([r"Mucinex.*?(?P<amount>\d+)mg"], unit="mg"),
        standard_doses=_doses("mg", 1200),
        theme=THEMES["mucinex"],
    ),
    # Supplements
    CatalogEntry(
        id="omega3",
        display_name="Omega-3",
        patterns=[r"Omega-3"],
        extractor=PatternExtractor([r"(?P<amount>\d+)mg\s+Omega-3"], unit="mg"),
        standard_doses=_doses("mg", 1040),
        theme=THEMES["omega3"],
    ),
    # Vaccines
    CatalogEntry(
        id="flu_vaccine",
        display_name="Flu Vaccine",
        patterns=[r"Flu shot", r"Flu vaccine"],
        extractor=FixedDoseExtractor([r"Flu shot", r"Flu vaccine"], amount=1, unit="dose"),
        standard_doses=(StandardDose(amount=1, unit="dose", label="1 dose"),),
        theme=THEMES["flu_vaccine"],
    ),
    CatalogEntry(
        id="covid_vaccine",
        display_name="COVID Vaccine",
        patterns=[r"Covid shot", r"Covid vaccine"],
        extractor=FixedDoseExtractor([r"Covid shot", r"Covid vaccine"], amount=1, unit="dose"),
        standard_doses=(StandardDose(amount=1, unit="dose", label="1 dose"),),
        theme=THEMES["covid_vaccine"],
    ),
    CatalogEntry(
        id="hep_vaccine",
        display_name="Hep B Vaccine",
        patterns=[r"Hep B"],
        extractor=FixedDoseExtractor([r"Hep B"], amount=1, unit="dose"),
        standard_doses=(StandardDose(amount=1, unit="dose", label="1 dose"),),
        theme=THEMES["hep_vaccine"],
    ),
    CatalogEntry(
        id="alcohol",
        display_name="Alcohol",
        patterns=[r"Alcohol"],
        extractor=FixedDoseExtractor([r"Alcohol"], amount=1, unit="drink"),
        standard_doses=(StandardDose(amount=1, unit="drink", label="1 drink"),),
        theme=THEMES["alcohol"],
    ),
)
