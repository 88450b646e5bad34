"""Known rental agreement layout signatures.

Feature names refer to fields of the standard template. Names the standard
template does not define (for instance ``companyId``) never count as matched,
which caps the confidence of those layouts at ``weight * 0.7``.
"""

from .definitions import VersionSignature

DEFAULT_VERSION_ID = "standard"
DEFAULT_VERSION_CONFIDENCE = 0.5


VERSION_SIGNATURES = (
    VersionSignature(
        id="standard_rental_agreement_v1",
        body_pattern=r"RENTAL AGREEMENT NUMBER.*?Budget Car Num.*?Drivers Lic Number",
        weight=1.0,
        feature_field_names=("raNumber", "customerNumber", "customerDriversLicense"),
    ),
    VersionSignature(
        id="standard_rental_agreement_v2",
        body_pattern=r"RENTAL AGREEMENT.*?RESERVATION NUMBER.*?Customer Name",
        weight=1.0,
        feature_field_names=("raNumber", "reservationNumber", "customerName"),
    ),
    VersionSignature(
        id="budget_rental_agreement_v1",
        body_pattern=r"Budget.*?RENTAL AGREEMENT.*?Loss Damage Waiver",
        weight=0.9,
        feature_field_names=("ldwAccepted", "lossDamageWaiver"),
    ),
    VersionSignature(
        id="budget_rental_agreement_v2",
        body_pattern=r"Budget.*?Car Rental Agreement.*?Personal Accident Insurance",
        weight=0.9,
        feature_field_names=("personalAccidentInsurance",),
    ),
    VersionSignature(
        id="express_rental_agreement",
        body_pattern=r"Express Rental.*?Quick Rental.*?Rapid Return",
        weight=0.8,
        feature_field_names=("expressService", "rapidReturn"),
    ),
    VersionSignature(
        id="corporate_rental_agreement",
        body_pattern=r"Corporate Account.*?Business Rental.*?Company ID",
        weight=0.8,
        feature_field_names=("corporateAccount", "companyId"),
    ),
    VersionSignature(
        id="international_rental_agreement",
        body_pattern=r"International.*?Passport.*?Foreign License",
        weight=0.7,
        feature_field_names=("passportNumber", "foreignLicense"),
    ),
)
