"""Five-record demo dataset (flat payload shape)."""

import copy

from agreement_sync.models.raw import RawAgreement

SAMPLE_AGREEMENTS: list[dict] = [
    {
        "id": "AGR-001",
        "navigatorId": "nav_001",
        "navigatorUrl": "https://navigator-d.docusign.com/agreements/nav_001",
        "title": "Germany & Austria - Imaging Systems (Sample)",
        "executionDate": "2024-01-15",
        "effectiveDate": "2024-02-01",
        "expirationDate": "2027-01-31",
        "status": "Active",
        "distributorLegalName": "MedizinTechnik Deutschland GmbH",
        "lineOfBusiness": "Medical Imaging",
        "initialTermLength": "3 years",
        "territoryCountries": ["Germany", "Austria"],
        "productCategories": ["MRI Systems", "CT Scanners", "Ultrasound Systems"],
        "exclusivityStatus": "Exclusive",
        "performanceBasedExclusivity": "Yes",
        "customerSegmentRestrictions": "All healthcare facilities",
        "commitmentCurrency": "EUR",
        "discountMRI_CT": 38,
        "discountUltrasound": 42,
        "discountPatientMonitoring": None,
        "softwareRevenueShare": 40,
        "priceCapIncrease": 3,
        "annualMinimums": [
            {"year": 2024, "amount": 2000000},
            {"year": 2025, "amount": 2500000},
            {"year": 2026, "amount": 3000000},
        ],
        "minimumPerformanceThreshold": 85,
        "currentPerformance": 92,
        "nonRenewalNoticeDays": 90,
        "departmentsImpacted": "Legal; Sales; Finance",
    },
    {
        "id": "AGR-002",
        "navigatorId": "nav_002",
        "navigatorUrl": "https://navigator-d.docusign.com/agreements/nav_002",
        "title": "UK & Ireland - Patient Monitoring (Sample)",
        "executionDate": "2023-06-10",
        "effectiveDate": "2023-07-01",
        "expirationDate": "2025-06-30",
        "status": "Active",
        "distributorLegalName": "BritMed Solutions Ltd.",
        "lineOfBusiness": "Patient Monitoring",
        "initialTermLength": "2 years",
        "territoryCountries": ["United Kingdom", "Ireland"],
        "productCategories": ["Patient Monitoring Systems", "AI Software"],
        "exclusivityStatus": "Conditional Exclusive",
        "performanceBasedExclusivity": "Yes",
        "customerSegmentRestrictions": "Hospitals and clinics only",
        "commitmentCurrency": "GBP",
        "discountMRI_CT": None,
        "discountUltrasound": None,
        "discountPatientMonitoring": 35,
        "softwareRevenueShare": 45,
        "priceCapIncrease": 2.5,
        "annualMinimums": [
            {"year": 2023, "amount": 800000},
            {"year": 2024, "amount": 1000000},
            {"year": 2025, "amount": 1200000},
        ],
        "minimumPerformanceThreshold": 85,
        "currentPerformance": 78,
        "nonRenewalNoticeDays": 90,
        "departmentsImpacted": "Legal; Sales",
    },
    {
        "id": "AGR-003",
        "navigatorId": "nav_003",
        "navigatorUrl": "https://navigator-d.docusign.com/agreements/nav_003",
        "title": "Japan - Advanced Imaging & AI (Sample)",
        "executionDate": "2024-09-20",
        "effectiveDate": "2024-10-01",
        "expirationDate": "2028-09-30",
        "status": "Active",
        "distributorLegalName": "NipponMed Technologies K.K.",
        "lineOfBusiness": "Medical Imaging",
        "initialTermLength": "4 years",
        "territoryCountries": ["Japan"],
        "productCategories": ["MRI Systems", "CT Scanners", "AI Software"],
        "exclusivityStatus": "Exclusive",
        "performanceBasedExclusivity": "No",
        "customerSegmentRestrictions": "All healthcare facilities",
        "commitmentCurrency": "JPY",
        "discountMRI_CT": 40,
        "discountUltrasound": 38,
        "discountPatientMonitoring": None,
        "softwareRevenueShare": 35,
        "priceCapIncrease": 4,
        "annualMinimums": [
            {"year": 2024, "amount": 500000000},
            {"year": 2025, "amount": 600000000},
            {"year": 2026, "amount": 700000000},
            {"year": 2027, "amount": 800000000},
        ],
        "minimumPerformanceThreshold": 90,
        "currentPerformance": 95,
        "nonRenewalNoticeDays": 120,
        "departmentsImpacted": "Legal; Sales; Finance; R&D",
    },
    {
        "id": "AGR-004",
        "navigatorId": "nav_004",
        "navigatorUrl": "https://navigator-d.docusign.com/agreements/nav_004",
        "title": "Brazil - Ultrasound Systems (Sample)",
        "executionDate": "2023-03-05",
        "effectiveDate": "2023-04-01",
        "expirationDate": "2025-03-31",
        "status": "Active",
        "distributorLegalName": "MedSul Distribuidora Ltda.",
        "lineOfBusiness": "Medical Imaging",
        "initialTermLength": "2 years",
        "territoryCountries": ["Brazil"],
        "productCategories": ["Ultrasound Systems"],
        "exclusivityStatus": "Non-Exclusive",
        "performanceBasedExclusivity": "No",
        "customerSegmentRestrictions": "Private healthcare only",
        "commitmentCurrency": "BRL",
        "discountMRI_CT": None,
        "discountUltrasound": 45,
        "discountPatientMonitoring": None,
        "softwareRevenueShare": None,
        "priceCapIncrease": 5,
        "annualMinimums": [
            {"year": 2023, "amount": 3000000},
            {"year": 2024, "amount": 3500000},
            {"year": 2025, "amount": 4000000},
        ],
        "minimumPerformanceThreshold": 80,
        "currentPerformance": 65,
        "nonRenewalNoticeDays": 60,
        "departmentsImpacted": "Sales; Finance",
    },
    {
        "id": "AGR-005",
        "navigatorId": "nav_005",
        "navigatorUrl": "https://navigator-d.docusign.com/agreements/nav_005",
        "title": "Australia & New Zealand - Full Portfolio (Sample)",
        "executionDate": "2024-11-12",
        "effectiveDate": "2024-12-01",
        "expirationDate": "2027-11-30",
        "status": "Active",
        "distributorLegalName": "AusMed Healthcare Solutions Pty Ltd",
        "lineOfBusiness": "Medical Equipment",
        "initialTermLength": "3 years",
        "territoryCountries": ["Australia", "New Zealand"],
        "productCategories": [
            "MRI Systems",
            "CT Scanners",
            "Ultrasound Systems",
            "Patient Monitoring Systems",
            "AI Software",
        ],
        "exclusivityStatus": "Exclusive",
        "performanceBasedExclusivity": "Yes",
        "customerSegmentRestrictions": "All healthcare facilities",
        "commitmentCurrency": "AUD",
        "discountMRI_CT": 36,
        "discountUltrasound": 40,
        "discountPatientMonitoring": 38,
        "softwareRevenueShare": 42,
        "priceCapIncrease": 3.5,
        "annualMinimums": [
            {"year": 2024, "amount": 3000000},
            {"year": 2025, "amount": 4000000},
            {"year": 2026, "amount": 5000000},
        ],
        "minimumPerformanceThreshold": 85,
        "currentPerformance": 88,
        "nonRenewalNoticeDays": 90,
        "departmentsImpacted": "Legal; Sales; Finance; Operations",
    },
]


def sample_agreements() -> list[RawAgreement]:
    """Fresh copies of the demo records, safe to mutate."""
    return [RawAgreement(data=copy.deepcopy(record)) for record in SAMPLE_AGREEMENTS]
