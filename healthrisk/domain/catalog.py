"""Default scoring tables.

Symptom weights use a 1-10 scale (1 = minimal concern, 10 = medical emergency).
Age and condition factors are multipliers against the adult reference of 1.0.
"""
from functools import lru_cache

from .models import (
    DEFAULT_SYMPTOM_WEIGHT,
    AgeBand,
    CombinationPattern,
    ConditionMultiplier,
    RiskCatalog,
    SymptomWeight,
)


CATALOG_VERSION = "1.0"


SYMPTOM_WEIGHTS = {
    # Emergency symptoms
    "difficulty breathing": 10,
    "severe shortness of breath": 10,
    "loss of consciousness": 10,
    "seizures": 10,
    "severe allergic reaction": 10,
    "choking": 10,
    "cardiac arrest": 10,
    "stroke symptoms": 10,
    "signs of stroke": 10,
    "severe bleeding": 10,
    "severe chest pain": 10,
    "suicidal thoughts": 10,
    "chest pain": 9.5,
    "sudden vision loss": 9.5,
    "severe burns": 9.8,
    "poisoning": 9.8,
    "paralysis": 9.8,
    "chest pain in elderly": 9.8,
    "blood in stool": 9.2,
    "coughing up blood": 9.1,
    "high fever in child": 9.1,
    "severe headache": 9,
    "severe abdominal pain": 9,
    "high fever": 9,
    "fainting": 9.0,
    "blood in vomit": 9,
    "blood in cough": 9,
    "sudden weakness in elderly": 9.0,

    # High severity
    "severe confusion": 8.9,
    "blue lips/fingers": 8.9,
    "shortness of breath": 8.7,
    "vomiting in infant": 8.7,
    "confusion in elderly": 8.7,
    "irregular heartbeat": 8.5,
    "disorientation": 8.4,
    "chest tightness": 8.3,
    "severe weakness": 8.3,
    "difficulty feeding": 8.3,
    "lethargy in child": 8.8,
    "confusion": 8.2,
    "inability to move joint": 8.2,
    "dehydration": 8.1,
    "severe dizziness": 8.1,
    "urinary retention": 8.1,
    "persistent vomiting": 8.0,
    "vision problems": 8.0,
    "double vision": 8,
    "red streaks": 8,
    "blood in urine": 8,
    "numbness": 7.9,
    "unexplained weight loss": 7.9,
    "irritability in infant": 7.9,
    "palpitations": 7.8,
    "severe diarrhea": 7.8,
    "memory loss": 7.8,
    "severe joint pain": 7.8,
    "swelling in face": 7.8,
    "yellow skin": 7.8,
    "testicular pain": 7.8,
    "falls": 7.8,
    "hearing loss": 7.7,
    "severe cough": 7.6,
    "fever": 7.5,
    "joint swelling": 7.5,
    "migraine": 7.4,
    "persistent cough": 7.3,
    "swelling in legs": 7.3,
    "vomiting": 7.2,
    "heavy menstrual bleeding": 7.2,
    "hip pain": 7.2,
    "stiff neck": 7.1,
    "nipple discharge": 7.1,
    "wheezing": 7,
    "difficulty swallowing": 7,
    "panic attacks": 7,
    "heavy bleeding": 7,
    "breast lumps": 7,
    "kidney pain": 7,
    "swollen lymph nodes": 7.0,

    # Moderate severity
    "tingling": 6.8,
    "moderate fever": 6.8,
    "swollen glands": 6.8,
    "loss of taste": 6.8,
    "genital discharge": 6.8,
    "hives": 6.7,
    "dizziness": 6.7,
    "dark urine": 6.7,
    "swelling": 6.6,
    "abdominal pain": 6.5,
    "loss of smell": 6.5,
    "headache": 6.3,
    "cough": 6.2,
    "skin rash": 6.2,
    "excessive tiredness": 6.2,
    "diarrhea": 6.1,
    "weakness": 6.1,
    "leg pain": 6.1,
    "chills": 6,
    "weight loss": 6,
    "joint pain": 6.0,
    "swollen joints": 6,
    "pus or discharge": 6,
    "productive cough": 6,
    "unusual moles": 6,
    "blurred vision": 6,
    "balance problems": 6,
    "painful urination": 6,
    "pelvic pain": 6,
    "stomach cramps": 5.9,
    "back pain": 5.9,
    "cloudy urine": 5.9,
    "low grade fever": 5.8,
    "nausea": 5.8,
    "insomnia": 5.8,
    "dental pain": 5.8,
    "menstrual irregularities": 5.8,
    "fatigue": 5.7,
    "muscle cramps": 5.7,
    "breast pain": 5.7,
    "neck pain": 5.6,
    "sore throat": 5.5,
    "leg cramps": 5.5,
    "missed periods": 5.5,
    "muscle aches": 5.4,
    "pale skin": 5.4,
    "sleep problems": 5.3,
    "hoarse voice": 5.2,
    "cold hands/feet": 5.2,
    "loss of appetite": 5.1,
    "strong urine odor": 5.1,
    "depression": 5,
    "night sweats": 5,
    "dry cough": 5,
    "burning urination": 5,
    "skin discoloration": 5,
    "eye pain": 5,
    "light sensitivity": 5,
    "ear discharge": 5,
    "incontinence": 5,

    # Lower severity
    "constipation": 4.8,
    "mouth sores": 4.6,
    "hot flashes": 4.3,
    "indigestion": 4.2,
    "restlessness": 4.2,
    "dry mouth": 4.1,
    "mood changes": 4.1,
    "nervousness": 4.0,
    "anxiety": 4,
    "sweating": 4,
    "frequent urination": 4,
    "weight gain": 4,
    "bruising": 4,
    "erectile dysfunction": 4,
    "irregular periods": 4,
    "eye discharge": 4,
    "ear pain": 4,
    "ringing in ears": 4,
    "urgency": 4,
    "bleeding gums": 4.9,
    "irritability": 3.9,
    "congestion": 3.8,
    "dry eyes": 3.7,
    "brittle nails": 3.6,
    "stuffy nose": 3.5,
    "watery eyes": 3.3,
    "runny nose": 3.2,
    "sneezing": 3.1,
    "difficulty sleeping": 3,
    "mood swings": 3,
    "throat irritation": 3,
    "heartburn": 3,
    "hair loss": 3,
    "bad breath": 2.8,
    "bloating": 2,
    "itching": 2,
    "nail changes": 2,
    "gas": 1,
}


# (name, lower bound inclusive, upper bound exclusive, multiplier)
AGE_BANDS = (
    ("newborn", 0, 0.25, 2.1),
    ("infant", 0.25, 1, 1.9),
    ("toddler", 1, 3, 1.6),
    ("preschool", 3, 6, 1.3),
    ("child", 6, 13, 1.15),
    ("teen", 13, 18, 1.0),
    ("young_adult", 18, 30, 0.95),
    ("adult", 30, 50, 1.0),
    ("middle_aged", 50, 65, 1.25),
    ("elderly", 65, 75, 1.6),
    ("very_elderly", 75, 85, 2.0),
    ("extreme_elderly", 85, None, 2.4),
)


CONDITION_MULTIPLIERS = {
    # Metabolic
    "diabetes": 1.7,
    "type 1 diabetes": 1.8,
    "type 2 diabetes": 1.6,
    "pre-diabetes": 1.2,
    "metabolic syndrome": 1.4,
    "obesity": 1.3,
    "severe obesity": 1.6,
    "thyroid disease": 1.3,
    "thyroid disorders": 1.1,
    "hyperthyroidism": 1.4,
    "hypothyroidism": 1.2,

    # Cardiovascular
    "heart disease": 1.9,
    "coronary artery disease": 2.0,
    "heart failure": 2.1,
    "cardiomyopathy": 1.9,
    "cardiovascular disease": 1.5,
    "arrhythmia": 1.5,
    "hypertension": 1.4,
    "high blood pressure": 1.4,
    "stroke history": 1.3,
    "peripheral artery disease": 1.6,
    "deep vein thrombosis": 1.7,
    "pulmonary embolism": 1.8,
    "blood clotting disorders": 1.3,

    # Respiratory
    "asthma": 1.5,
    "severe asthma": 1.8,
    "copd": 1.7,
    "emphysema": 1.8,
    "chronic bronchitis": 1.6,
    "chronic lung disease": 1.4,
    "pulmonary fibrosis": 1.9,
    "sleep apnea": 1.3,
    "cystic fibrosis": 2.0,

    # Immune
    "immunocompromised": 1.5,
    "hiv/aids": 2.1,
    "cancer": 1.9,
    "active cancer": 2.1,
    "cancer remission": 1.5,
    "chemotherapy": 2.0,
    "radiation therapy": 1.7,
    "organ transplant": 2.2,
    "autoimmune disease": 1.6,
    "rheumatoid arthritis": 1.5,
    "lupus": 1.7,
    "multiple sclerosis": 1.6,
    "crohn's disease": 1.4,
    "ulcerative colitis": 1.4,

    # Kidney and liver
    "kidney disease": 1.8,
    "chronic kidney disease": 1.9,
    "dialysis": 2.0,
    "liver disease": 1.6,
    "cirrhosis": 1.9,
    "hepatitis": 1.5,

    # Neurological
    "dementia": 1.7,
    "alzheimer's": 1.8,
    "parkinson's": 1.6,
    "epilepsy": 1.2,
    "cerebral palsy": 1.5,
    "spinal cord injury": 1.6,

    # Blood
    "anemia": 1.3,
    "sickle cell disease": 1.8,
    "hemophilia": 1.6,
    "thrombocytopenia": 1.5,

    # Mental health
    "depression": 1.2,
    "severe depression": 1.4,
    "bipolar disorder": 1.3,
    "schizophrenia": 1.5,
    "anxiety disorder": 1.1,
    "panic disorder": 1.2,
    "mental health conditions": 1.1,

    # Pregnancy
    "pregnancy": 1.2,
    "high-risk pregnancy": 1.8,
    "recent pregnancy": 1.3,

    # Substance use
    "smoking": 1.4,
    "heavy smoking": 1.6,
    "alcohol abuse": 1.3,
    "drug abuse": 1.5,

    # Musculoskeletal
    "osteoporosis": 1.2,
    "arthritis": 1.1,
    "severe arthritis": 1.3,
}


# (name, required symptoms, multiplier, urgency, description)
COMBINATION_PATTERNS = (
    ("chest_pain_breathing", ("chest pain", "difficulty breathing", "shortness of breath"),
     1.8, "critical", "Potential heart attack or pulmonary embolism"),
    ("chest_pain_sweating", ("chest pain", "sweating", "nausea"),
     1.7, "critical", "Classic heart attack presentation"),
    ("chest_pain_dizziness", ("chest pain", "dizziness", "fainting"),
     1.6, "critical", "Cardiac event with hemodynamic compromise"),
    ("stroke_triad", ("severe headache", "confusion", "weakness"),
     1.9, "critical", "Potential stroke"),
    ("stroke_speech", ("confusion", "weakness", "vision problems"),
     1.8, "critical", "Stroke with neurological deficits"),
    ("severe_respiratory", ("difficulty breathing", "chest pain", "blue lips/fingers"),
     2.0, "critical", "Severe respiratory distress"),
    ("asthma_attack", ("difficulty breathing", "wheezing", "chest tightness"),
     1.6, "high", "Severe asthma exacerbation"),
    ("sepsis_indicators", ("high fever", "confusion", "severe weakness"),
     1.8, "critical", "Potential sepsis"),
    ("severe_infection", ("high fever", "chills", "severe weakness"),
     1.5, "high", "Severe systemic infection"),
    ("meningitis_signs", ("severe headache", "stiff neck", "fever"),
     1.9, "critical", "Potential meningitis"),
    ("gi_bleeding", ("vomiting", "blood in stool", "severe weakness"),
     1.7, "critical", "Gastrointestinal bleeding"),
    ("severe_dehydration", ("persistent vomiting", "diarrhea", "dizziness"),
     1.4, "high", "Severe dehydration"),
    ("appendicitis_signs", ("severe abdominal pain", "fever", "nausea"),
     1.6, "high", "Potential appendicitis"),
    ("increased_icp", ("severe headache", "vomiting", "vision problems"),
     1.7, "critical", "Increased intracranial pressure"),
    ("seizure_cluster", ("seizures", "confusion", "weakness"),
     1.6, "critical", "Seizure disorder or brain injury"),
    ("diabetic_emergency", ("confusion", "severe weakness", "vomiting"),
     1.5, "high", "Diabetic ketoacidosis or hypoglycemia"),
    ("thyroid_storm", ("high fever", "palpitations", "confusion"),
     1.6, "critical", "Thyroid storm"),
    ("anaphylaxis", ("difficulty breathing", "hives", "swelling"),
     2.0, "critical", "Anaphylactic reaction"),
    ("severe_allergy", ("hives", "swelling", "difficulty breathing"),
     1.8, "critical", "Severe allergic reaction"),
    ("preeclampsia", ("severe headache", "vision problems", "swelling"),
     1.7, "critical", "Potential preeclampsia"),
    ("pregnancy_bleeding", ("abdominal pain", "bleeding", "dizziness"),
     1.8, "critical", "Pregnancy complication"),
)


def build_catalog(version: str = CATALOG_VERSION) -> RiskCatalog:
    return RiskCatalog(
        version=version,
        default_weight=DEFAULT_SYMPTOM_WEIGHT,
        symptom_weights=tuple(
            SymptomWeight(symptom=symptom, weight=weight) for symptom, weight in SYMPTOM_WEIGHTS.items()
        ),
        age_bands=tuple(
            AgeBand(name=name, lower_bound=lower, upper_bound=upper, multiplier=multiplier)
            for name, lower, upper, multiplier in AGE_BANDS
        ),
        condition_multipliers=tuple(
            ConditionMultiplier(condition=condition, multiplier=multiplier)
            for condition, multiplier in CONDITION_MULTIPLIERS.items()
        ),
        combinations=tuple(
            CombinationPattern(
                name=name,
                required_symptoms=required,
                multiplier=multiplier,
                urgency=urgency,
                description=description,
            )
            for name, required, multiplier, urgency, description in COMBINATION_PATTERNS
        ),
    )


@lru_cache(maxsize=1)
def default_catalog() -> RiskCatalog:
    """The built-in catalog, constructed once per process."""
    return build_catalog()
