# application/protocolos/base_conocimiento.py
"""
Base de conocimiento clínica (solo lectura).

El orden de declaración es el orden de evaluación: gana el primer protocolo
con alguna keyword contenida en el diagnóstico. DEFAULT no tiene keywords y
solo se usa como respaldo.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Optional, Tuple

from consultadesk.app.domain.protocolos import CODIGO_DEFAULT, LineaProtocolo as L, Protocolo

CARDIOLOGIA = "Cardiology"
RESPIRATORIO = "Respiratory"
DIGESTIVO = "Gastro"
ENDOCRINO = "Endocrine"
GENERAL = "General"


PROTOCOLOS: Tuple[Protocolo, ...] = (
    # Cardiología
    Protocolo.crear(
        "PROTO-CVS-001",
        condicion="Essential Hypertension (Stage 1)",
        categoria=CARDIOLOGIA,
        keywords=("htn", "hypertension", "bp", "high bp", "pressure", "essential hypertension"),
        rx=(
            L("Tab. Telmisartan 40mg", "1 Tab", "OD (M)", "30 Days", "Morning, before food"),
            L("Tab. Amlodipine 5mg", "1 Tab", "OD (N)", "30 Days", "Night"),
        ),
        consejos="Salt restriction (<5g/day). 30 mins aerobic exercise daily. Monthly BP Charting. Avoid stress.",
        pruebas="Lipid Profile, Serum Creatinine, ECG, Urine Routine.",
    ),
    Protocolo.crear(
        "PROTO-CVS-002",
        condicion="Essential Hypertension (Stage 2 / Uncontrolled)",
        categoria=CARDIOLOGIA,
        keywords=("severe htn", "uncontrolled bp", "stage 2 hypertension"),
        rx=(
            L("Tab. Telmisartan 80mg", "1 Tab", "OD (M)", "30 Days", "Morning"),
            L("Tab. Chlorthalidone 12.5mg", "1 Tab", "OD (M)", "30 Days", "With Telmisartan"),
            L("Tab. Amlodipine 10mg", "1 Tab", "OD (N)", "30 Days", "Night"),
        ),
        consejos="Strict salt restriction. Review in 1 week. DASH Diet recommended.",
        pruebas="Echo, Renal Doppler (if resistant), Fundoscopy.",
    ),
    Protocolo.crear(
        "PROTO-CVS-003",
        condicion="Stable Angina Pectoris",
        categoria=CARDIOLOGIA,
        keywords=("angina", "chest pain", "ischemia", "cad", "coronary"),
        rx=(
            L("Tab. Aspirin 75mg", "1 Tab", "OD", "30 Days", "After lunch"),
            L("Tab. Atorvastatin 40mg", "1 Tab", "HS", "30 Days", "Night"),
            L("Tab. Metoprolol Succinate 25mg", "1 Tab", "OD", "30 Days", "Morning"),
            L("Tab. Isosorbide Mononitrate 30mg", "1 Tab", "OD", "30 Days", "Slow Release"),
            L("Tab. Sorbitrate 5mg", "1 Tab", "SOS", "10 Days", "Sublingual for chest pain"),
        ),
        consejos="Avoid exertion. Stop smoking immediately. Low fat diet. Carry Sorbitrate always.",
        pruebas="TMT (Treadmill Test), 2D Echo, Lipid Profile.",
    ),
    Protocolo.crear(
        "PROTO-CVS-004",
        condicion="Congestive Heart Failure (HFrEF)",
        categoria=CARDIOLOGIA,
        keywords=("heart failure", "chf", "failure", "edema", "breathlessness", "lvf"),
        rx=(
            L("Tab. Sacubitril 49mg + Valsartan 51mg", "1 Tab", "BD", "30 Days", "ARNI"),
            L("Tab. Furosemide 40mg", "1 Tab", "OD/BD", "30 Days", "Diuretic (Monitor Urine)"),
            L("Tab. Spironolactone 25mg", "1 Tab", "OD", "30 Days", "Aldosterone Antagonist"),
            L("Tab. Dapagliflozin 10mg", "1 Tab", "OD", "30 Days", "SGLT2 Inhibitor"),
        ),
        consejos=(
            "Fluid restriction (1.5L/day). Daily weight monitoring. Salt < 2g/day. "
            "Propped up position for sleep."
        ),
        pruebas="Serum Electrolytes (K+), Creatinine, Pro-BNP.",
    ),
    Protocolo.crear(
        "PROTO-CVS-005",
        condicion="Atrial Fibrillation (Rate Control)",
        categoria=CARDIOLOGIA,
        keywords=("af", "atrial fibrillation", "palpitation", "irregular pulse", "arrhythmia"),
        rx=(
            L("Tab. Diltiazem 60mg", "1 Tab", "TDS", "30 Days", "Rate Control"),
            L("Tab. Apixaban 5mg", "1 Tab", "BD", "30 Days", "Anticoagulant (NOAC)"),
            L("Tab. Atorvastatin 20mg", "1 Tab", "HS", "30 Days", "Lipid lowering"),
        ),
        consejos="Watch for bleeding gums/black stools. Regular pulse check.",
        pruebas="INR (if on Warfarin), ECG, Holter Monitoring.",
    ),
    Protocolo.crear(
        "PROTO-CVS-006",
        condicion="Dyslipidemia / Hypercholesterolemia",
        categoria=CARDIOLOGIA,
        keywords=("lipid", "cholesterol", "ldl", "triglycerides", "high fat", "dyslipidemia"),
        rx=(
            L("Tab. Rosuvastatin 10mg", "1 Tab", "HS", "60 Days", "High intensity statin"),
            L("Cap. Fenofibrate 145mg", "1 Cap", "OD", "60 Days", "If TG > 500"),
        ),
        consejos="Stop oil/ghee completely. Increase fiber intake. Daily 45 min walk.",
        pruebas="Lipid Profile after 2 months, LFT.",
    ),
    # Respiratorio
    Protocolo.crear(
        "PROTO-RESP-001",
        condicion="Acute Viral Rhinitis (Common Cold)",
        categoria=RESPIRATORIO,
        keywords=("cold", "coryza", "runny nose", "sneezing", "nasal block", "flu"),
        rx=(
            L("Tab. Levocetirizine 5mg", "1 Tab", "HS", "5 Days", "Anti-allergic"),
            L("Tab. Paracetamol 500mg", "1 Tab", "SOS", "3 Days", "For Fever/Pain"),
            L("Nasal Drops Xylometazoline", "2 Drops", "TDS", "5 Days", "Into both nostrils"),
        ),
        consejos="Steam inhalation twice daily. Warm saline gargles. Hydration.",
        pruebas="None.",
    ),
    Protocolo.crear(
        "PROTO-RESP-002",
        condicion="Acute Bronchitis / LRTI",
        categoria=RESPIRATORIO,
        keywords=("cough", "sputum", "chest congestion", "bronchitis", "lrti"),
        rx=(
            L("Cap. Amoxicillin 500mg + Clavulanic Acid 125mg", "1 Cap", "BD", "5 Days", "Antibiotic"),
            L("Syr. Ambroxol + Guaiphenesin", "10ml", "TDS", "5 Days", "Expectorant"),
            L("Tab. Acebrophylline 100mg", "1 Tab", "BD", "5 Days", "Bronchodilator"),
        ),
        consejos="Avoid cold water/drinks. Chest physiotherapy (steam). Review if breathless.",
        pruebas="CXR PA View, CBC.",
    ),
    Protocolo.crear(
        "PROTO-RESP-003",
        condicion="Bronchial Asthma (Acute Exacerbation)",
        categoria=RESPIRATORIO,
        keywords=("asthma", "wheeze", "breathless", "asthmatic", "copd"),
        rx=(
            L("Inhaler Formoterol + Budesonide", "2 Puffs", "BD", "Continuous", "Rotacaps/Inhaler"),
            L("Tab. Prednisolone 10mg", "1 Tab", "OD", "5 Days", "Steroid (Taper)"),
            L("Tab. Montelukast 10mg", "1 Tab", "HS", "10 Days", "Maintenance"),
        ),
        consejos="Learn inhaler technique. Avoid allergens (dust/pollen).",
        pruebas="PFT (Spirometry).",
    ),
    # Digestivo
    Protocolo.crear(
        "PROTO-GI-001",
        condicion="Acute Gastritis / GERD",
        categoria=DIGESTIVO,
        keywords=("gastritis", "acidity", "heartburn", "gerd", "burning", "stomach pain", "acid"),
        rx=(
            L("Cap. Pantoprazole 40mg + Domperidone 30mg", "1 Cap", "OD (BBF)", "7 Days", "Empty Stomach"),
            L("Syr. Sucralfate Suspension", "10ml", "TDS", "5 Days", "Before meals"),
            L("Tab. Dicyclomine", "1 Tab", "SOS", "2 Days", "For spasmodic pain"),
        ),
        consejos="Avoid spicy/oily food. Small frequent meals. Dinner 2 hours before sleep.",
        pruebas="USG Abdomen (if recurrent).",
    ),
    Protocolo.crear(
        "PROTO-GI-002",
        condicion="Acute Gastroenteritis (Infective Diarrhea)",
        categoria=DIGESTIVO,
        keywords=("diarrhea", "loose motion", "dysentery", "vomiting", "stomach upset"),
        rx=(
            L("Tab. Ofloxacin 200mg + Ornidazole 500mg", "1 Tab", "BD", "5 Days", "Antibiotic"),
            L("Cap. Racecadotril 100mg", "1 Cap", "TDS", "3 Days", "Anti-secretory"),
            L("Sachet Probiotic (Saccharomyces)", "1 Sachet", "BD", "5 Days", "Mix in water"),
            L("ORS Powder", "As needed", "Freq", "3 Days", "Rehydration is Key"),
        ),
        consejos="Strict fluid intake (ORS/Coconut water). Bland diet (Curd rice, Toast). No milk.",
        pruebas="Stool Routine.",
    ),
    # Endocrino
    Protocolo.crear(
        "PROTO-ENDO-001",
        condicion="Type 2 Diabetes Mellitus",
        categoria=ENDOCRINO,
        keywords=("diabetes", "sugar", "dm", "t2dm", "high sugar", "glucose"),
        rx=(
            L("Tab. Metformin 500mg (SR)", "1 Tab", "BD", "30 Days", "After food"),
            L("Tab. Glimepiride 1mg", "1 Tab", "OD", "30 Days", "Before breakfast"),
        ),
        consejos="Diabetic Diet (No direct sugar, sweets). Foot care. Regular exercise.",
        pruebas="HbA1c, FBS, PPBS, Lipid Profile.",
    ),
    Protocolo.crear(
        "PROTO-ENDO-002",
        condicion="Hypothyroidism",
        categoria=ENDOCRINO,
        keywords=("thyroid", "hypothyroid", "tsh", "weight gain"),
        rx=(
            L("Tab. Thyroxine Sodium 50mcg", "1 Tab", "OD (BBF)", "30 Days", "Early morning empty stomach"),
        ),
        consejos="Take medicine on empty stomach. Avoid cabbage/cauliflower.",
        pruebas="T3, T4, TSH.",
    ),
    # General
    Protocolo.crear(
        "PROTO-GEN-001",
        condicion="Viral Pyrexia (Fever)",
        categoria=GENERAL,
        keywords=("fever", "pyrexia", "temp", "chills", "viral", "temperature"),
        rx=(
            L("Tab. Paracetamol 650mg", "1 Tab", "TDS", "3 Days", "For Fever"),
            L("Tab. Pantoprazole 40mg", "1 Tab", "OD", "3 Days", "Gastric protection"),
            L("Cap. Vitamin C + Zinc", "1 Cap", "OD", "10 Days", "Immunity"),
        ),
        consejos="Complete bed rest. Plenty of oral fluids. Tepid sponging if >101°F.",
        pruebas="CBC, MP/Widal (if > 5 days).",
    ),
    Protocolo.crear(
        "PROTO-GEN-002",
        condicion="General Myalgia / Body Ache",
        categoria=GENERAL,
        keywords=("body pain", "ache", "myalgia", "weakness", "tired", "pain"),
        rx=(
            L("Tab. Aceclofenac 100mg + Paracetamol 325mg", "1 Tab", "BD", "3 Days", "After food"),
            L("Cap. B-Complex + Vit C", "1 Cap", "OD", "15 Days", "Supplement"),
        ),
        consejos="Hot water bath. Rest. Hydration.",
        pruebas="None.",
    ),
    Protocolo.crear(
        "PROTO-GEN-003",
        condicion="Migraine Headache",
        categoria=GENERAL,
        keywords=("migraine", "headache", "throbbing", "head pain", "hemi-cranial"),
        rx=(
            L("Tab. Naproxen 250mg", "1 Tab", "SOS", "3 Days", "Pain"),
            L("Tab. Rizatriptan 5mg", "1 Tab", "SOS", "1 Day", "At onset of headache"),
            L("Tab. Flunarizine 10mg", "1 Tab", "HS", "10 Days", "Prophylaxis"),
        ),
        consejos="Avoid triggers (bright light, noise, cheese, chocolate). Sleep in dark room.",
        pruebas="None (Clinical Dx).",
    ),
)

PROTOCOLO_DEFAULT = Protocolo.crear(
    CODIGO_DEFAULT,
    condicion="General Symptomatic Treatment",
    categoria=GENERAL,
    keywords=(),
    rx=(
        L("Tab. Multivitamin", "1 Tab", "OD", "5 Days", "Supportive"),
        L("Tab. Paracetamol 500mg", "1 Tab", "SOS", "3 Days", "For Pain/Fever"),
    ),
    consejos="Follow general hygiene. Review if symptoms persist.",
    pruebas="Routine Blood Work.",
)


class BaseConocimiento:
    def __init__(
        self,
        protocolos: Iterable[Protocolo] = PROTOCOLOS,
        default: Protocolo = PROTOCOLO_DEFAULT,
    ) -> None:
        self._protocolos = tuple(p for p in protocolos if not p.es_fallback)
        self._default = default
        self._por_codigo: Dict[str, Protocolo] = {p.codigo: p for p in self._protocolos}
        self._por_codigo[default.codigo] = default

    @property
    def default(self) -> Protocolo:
        return self._default

    def get(self, codigo: str) -> Optional[Protocolo]:
        return self._por_codigo.get(codigo)

    def __iter__(self) -> Iterator[Protocolo]:
        return iter(self._protocolos)

    def __len__(self) -> int:
        return len(self._protocolos)
