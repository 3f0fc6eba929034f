"""Variant schema table: which sections each document variant must carry"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, model_validator


REFERENCES_ID = "references"
REFERENCES_TITLE = "Références bibliographiques"


class SchemaField(BaseModel):
    """A fixed section of a variant: canonical id, display title, legacy storage paths."""
    id:      str
    title:   str
    sources: list[str] = Field(default_factory=list, description="Dotted legacy paths read when id is absent")


class VariantSchema(BaseModel):
    name:                 str
    aliases:              list[str] = Field(default_factory=list)
    fields:               list[SchemaField] = Field(default_factory=list)
    uses_memo_sections:   bool = False
    uses_custom_sections: bool = True


class VariantTable(BaseModel):
    """Versioned variant -> schema mapping; base is used for missing or unknown variants."""
    version:  int = 1
    base:     str
    variants: list[VariantSchema]

    @model_validator(mode="after")
    def _check_base(self) -> "VariantTable":
        names = [v.name for v in self.variants]
        if len(set(names)) != len(names):
            raise ValueError("Duplicate variant names in table")
        if self.base not in names:
            raise ValueError(f"Base variant {self.base!r} is not defined")
        return self

    def lookup(self, variant: Optional[str]) -> Optional[VariantSchema]:
        """Return the schema named or aliased by variant, else None."""
        if not isinstance(variant, str):
            return None
        key = variant.strip().lower()
        for v in self.variants:
            if key == v.name or key in v.aliases:
                return v
        return None

    def get(self, variant: Optional[str]) -> VariantSchema:
        return self.lookup(variant) or self.lookup(self.base)


def _disease_fields(overview: str, treatment: str, lifestyle: str) -> list[dict[str, Any]]:
    return [
        {"id": "patientSituation",   "title": "Cas comptoir"},
        {"id": "keyQuestions",       "title": "Questions clés à poser"},
        {"id": "pathologyOverview",  "title": overview},
        {"id": "redFlags",           "title": "Signaux d'alerte"},
        {"id": "mainTreatment",      "title": treatment, "sources": ["recommendations.mainTreatment"]},
        {"id": "associatedProducts", "title": "Produits associés", "sources": ["recommendations.associatedProducts"]},
        {"id": "lifestyleAdvice",    "title": lifestyle, "sources": ["recommendations.lifestyleAdvice"]},
        {"id": "dietaryAdvice",      "title": "Conseils alimentaires", "sources": ["recommendations.dietaryAdvice"]},
    ]


DEFAULT_TABLE = VariantTable.model_validate({
    "version": 3,
    "base": "disease",
    "variants": [
        {
            "name": "disease",
            "aliases": ["maladie", "exhaustive"],
            "fields": _disease_fields("Aperçu pathologie", "Traitement principal", "Hygiène de vie"),
        },
        {
            "name": "dermocosmetic",
            "aliases": ["dermocosmetique"],
            "fields": _disease_fields("Besoin dermo-cosmétique", "Dermocosmétique principal", "Conseils hygiène de vie"),
        },
        {
            "name": "prescription",
            "aliases": ["ordonnances"],
            "fields": [
                {"id": "prescription",         "title": "Ordonnance", "sources": ["ordonnance"]},
                {"id": "prescriptionAnalysis", "title": "Analyse de l'ordonnance", "sources": ["analyseOrdonnance"]},
                {"id": "treatmentAdvice",      "title": "Conseils sur le traitement", "sources": ["conseilsTraitement"]},
                {"id": "diseaseInformation",   "title": "Informations sur la maladie", "sources": ["informationsMaladie"]},
                {"id": "lifestyleAdvice",      "title": "Conseils d'hygiène de vie", "sources": ["conseilsHygieneDeVie"]},
                {"id": "dietaryAdvice",        "title": "Conseils alimentaires", "sources": ["conseilsAlimentaires"]},
                {"id": "additionalSales",      "title": "Ventes additionnelles", "sources": ["ventesAdditionnelles"]},
            ],
        },
        {
            "name": "medical-device",
            "aliases": ["dispositifs-medicaux"],
            "fields": [
                {"id": "patientSituation",   "title": "Cas comptoir"},
                {"id": "counselingGoals",    "title": "Objectifs de conseil"},
                {"id": "relatedConditions",  "title": "Pathologies concernées"},
                {"id": "deviceInterest",     "title": "Intérêt du dispositif"},
                {"id": "healthBenefits",     "title": "Bénéfices pour la santé"},
                {"id": "recommendedDevices", "title": "Dispositifs à conseiller ou à dispenser"},
                {"id": "objectionHandling",  "title": "Réponses aux objections des clients"},
                {"id": "sponsoredPages",     "title": "Pages sponsorisées"},
            ],
        },
        {
            "name": "communication",
            "fields": [{"id": "patientSituation", "title": "Cas comptoir"}],
        },
        {"name": "pharmacology",   "aliases": ["pharmacologie"], "uses_memo_sections": True, "uses_custom_sections": False},
        {"name": "knowledge",      "aliases": ["savoir"],        "uses_memo_sections": True, "uses_custom_sections": False},
        {"name": "medication",     "aliases": ["le-medicament"], "uses_memo_sections": True, "uses_custom_sections": False},
        {"name": "micronutrition", "uses_memo_sections": True, "uses_custom_sections": False},
    ],
})


def load_variant_table(path: str | Path) -> VariantTable:
    """Load and validate a variant table from YAML. Raises ValueError on bad files."""
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ValueError(f"Invalid variant table {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Invalid variant table {path}: expected a mapping")
    return VariantTable.model_validate(data)


def resolve_variant(variant: Any, table: VariantTable = DEFAULT_TABLE) -> str:
    """Return the stored variant name: canonical name for known/aliased, verbatim for unknown.

    A missing or non-string discriminant becomes the base variant.
    """
    schema = table.lookup(variant)
    if schema is not None:
        return schema.name
    if isinstance(variant, str) and variant.strip():
        return variant
    return table.base


def schema_fields(variant: Optional[str], table: VariantTable = DEFAULT_TABLE) -> list[SchemaField]:
    """Fixed fields of a variant followed by the trailing references field."""
    fields = [f for f in table.get(variant).fields if f.id != REFERENCES_ID]
    return [*fields, SchemaField(id=REFERENCES_ID, title=REFERENCES_TITLE)]


def mandatory_ids(variant: Optional[str], table: VariantTable = DEFAULT_TABLE) -> list[str]:
    """Ordered section ids that must exist for variant; unknown variants get the base list."""
    return [f.id for f in schema_fields(variant, table)]


def uses_memo_sections(variant: Optional[str], table: VariantTable = DEFAULT_TABLE) -> bool:
    return table.get(variant).uses_memo_sections


def uses_custom_sections(variant: Optional[str], table: VariantTable = DEFAULT_TABLE) -> bool:
    return table.get(variant).uses_custom_sections
