"""Rental agreement template catalog.

Patterns within a field are ordered most specific first: the field extractor
stops at the first pattern that captures a value.
"""

import re

from .definitions import TemplateDefinition, field_definition

STANDARD_RENTAL_AGREEMENT_ID = "standard_rental_agreement"
BUDGET_RENTAL_AGREEMENT_ID = "budget_rental_agreement"

_BOOLEAN_MARKERS = r"(Yes|No|X|✓|✗)"


STANDARD_FIELDS = {
    "raNumber": field_definition(
        "Rental Agreement Number",
        description="The unique identifier for the rental agreement",
        required=True,
        patterns=[
            r"RENTAL AGREEMENT NUMBER\s*(\d{6,10})",
            r"RA(?:Number|#|No|Number:)[:\s]*([A-Z0-9-]{4,20})",
            r"Agreement(?:Number|#|No|Number:)[:\s]*([A-Z0-9-]{4,20})",
        ],
        validations=["is_not_empty"],
        transformations=["clean_text", "to_upper_case"],
    ),
    "customerName": field_definition(
        "Customer Name",
        description="Full name of the customer",
        required=True,
        patterns=[
            r"Customer Name\s*:\s*([^:\n]+?)(?=\s{2,}|$|\n)",
            r"(?:Customer|Renter|Client)(?:Name|:)[:\s]*([^,\n]{3,50})",
        ],
        validations=["is_not_empty"],
        transformations=["clean_text"],
    ),
    "customerNumber": field_definition(
        "Customer Number",
        description="Unique identifier for the customer",
        patterns=[
            r"Budget Car Num\s*:\s*(\d[\s\d]*\d)",
            r"(?:Customer|Client)(?:Number|ID|#|No)[:\s]*([A-Z0-9-]{3,20})",
        ],
        transformations=["clean_text", "extract_digits"],
    ),
    "customerEmail": field_definition(
        "Customer Email",
        description="Email address of the customer",
        patterns=[
            r"(?:Email|E-mail|Email Address)[:\s]*([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})",
        ],
        validations=["is_email"],
        transformations=["clean_text", "to_lower_case"],
    ),
    "customerPhone": field_definition(
        "Customer Phone",
        description="Contact phone number of the customer",
        patterns=[
            r"(?:Home|Cell|Mobile|Customer)\s*Phone\s*:\s*(\+?[\d(][\d\s().-]{8,18}\d)",
            r"(?:Phone|Telephone|Tel)(?:\s*(?:Number|No|#))?[:\s]*(\+?[\d(][\d\s().-]{8,18}\d)",
        ],
        validations=["is_phone_number"],
        transformations=["clean_text", "format_phone_number"],
    ),
    "customerAddress": field_definition(
        "Customer Address",
        description="Physical address of the customer",
        patterns=[
            r"(?:Customer|Renter|Client)(?:Address|:)[:\s]*([^,]*,[^,]*,[^,]*\s+\w{2}\s+\d{5}(-\d{4})?)",
            r"Address(?:of Customer|of Renter|:)[:\s]*([^,]*,[^,]*,[^,]*\s+\w{2}\s+\d{5}(-\d{4})?)",
        ],
        transformations=["clean_text"],
    ),
    "customerDriversLicense": field_definition(
        "Driver's License",
        description="Customer's driver's license number",
        patterns=[
            r"Drivers Lic Number\s*:\s*([A-Z0-9X]+)",
            r"(?:Driver'?s License|DL|License)(?:Number|#|No)?[:\s]*([A-Z0-9-]{5,20})",
        ],
        validations=["is_not_empty"],
        transformations=["clean_text", "to_upper_case"],
    ),
    "carMakeModel": field_definition(
        "Car Make and Model",
        description="Make and model of the rented vehicle",
        patterns=[
            r"Veh Description\s*:\s*([A-Z0-9\s]+(?:AWD)?)\s+(?=Methods|$)",
        ],
        validations=["is_not_empty"],
        transformations=["clean_text"],
    ),
    "carYear": field_definition(
        "Car Year",
        description="Year of the rented vehicle",
        patterns=[
            r"(?:Vehicle|Car|Auto)(?:Year)[:\s]*(\d{4})",
            r"Year[:\s]*(\d{4})",
        ],
        validations=["is_numeric"],
        transformations=["clean_text"],
    ),
    "carColor": field_definition(
        "Car Color",
        description="Color of the rented vehicle",
        patterns=[
            r"(?:Vehicle|Car|Auto)(?:Color)[:\s]*([A-Za-z]{3,20})",
            r"Color[:\s]*([A-Za-z]{3,20})",
        ],
        transformations=["clean_text"],
    ),
    "carVIN": field_definition(
        "VIN",
        description="Vehicle Identification Number",
        patterns=[
            r"(?:VIN|Vehicle(?:Identification|ID)Number)[:\s]*([A-HJ-NPR-Z0-9]{17})",
        ],
        validations=["is_valid_vin"],
        transformations=["clean_text", "to_upper_case"],
    ),
    "vehicleOdometer": field_definition(
        "Vehicle Odometer",
        description="Odometer reading of the vehicle",
        patterns=[
            r"Odometer Out\s*:\s*(\d+)",
            r"(?:Odometer|Mileage|Miles)[:\s]*(\d{1,6})",
        ],
        validations=["is_numeric"],
        transformations=["extract_digits"],
    ),
    "rentingLocation": field_definition(
        "Renting Location",
        description="Location where the vehicle was rented",
        patterns=[
            r"Pickup Location\s*:\s*([^\n]+?LAS VEGAS,NV,\d{5}(?:-\d{4})?,US)",
        ],
        transformations=["clean_text"],
    ),
    "pickupLocation": field_definition(
        "Pickup Location",
        description="Location where the vehicle was picked up",
        patterns=[
            r"Pickup Location\s*:\s*(4475[^\n]+?)(?=\s+Return Location|\s{2,}|$)",
        ],
        transformations=["append_las_vegas_branch"],
    ),
    "returnLocation": field_definition(
        "Return Location",
        description="Location where the vehicle will be returned",
        patterns=[
            r"Return Location\s*:\s*(4475[^\n]+?)(?=\s{2,}|$|\n)",
        ],
        transformations=["append_las_vegas_branch"],
    ),
    "ldwAccepted": field_definition(
        "LDW Accepted",
        description="Loss Damage Waiver acceptance status",
        patterns=[
            r"Loss Damage Waiver\s+[\d.]+/Day\s+(Accepted|Declined)",
            r"(?:LDW|Loss Damage Waiver)(?:Accepted|:)[:\s]*" + _BOOLEAN_MARKERS,
        ],
        transformations=["parse_boolean"],
    ),
    "rentersLiabilityInsurance": field_definition(
        "Renters Liability Insurance",
        description="Renters liability insurance status",
        patterns=[
            re.compile(r"Renter's liability insurance:.*?XX_+(\w+)", re.IGNORECASE | re.DOTALL | re.ASCII),
            r"(?:Liability|Renters Liability|Liability Insurance)[:\s]*" + _BOOLEAN_MARKERS,
        ],
        transformations=["parse_boolean"],
    ),
    "lossDamageWaiver": field_definition(
        "Loss Damage Waiver",
        description="Loss damage waiver status",
        patterns=[
            r"(?:Loss Damage|Damage Waiver|LDW)[:\s]*" + _BOOLEAN_MARKERS,
            r"(?:Loss Damage|Damage Waiver|LDW)[:\s]*\[(X| )\]",
        ],
        transformations=["parse_boolean"],
    ),
    "paymentMethod": field_definition(
        "Payment Method",
        description="Payment method information",
        patterns=[
            r"Methods of Payment\s*:\s*([A-Z]+\s+XX\d{4})",
        ],
        transformations=["clean_text"],
    ),
    "reservationNumber": field_definition(
        "Reservation Number",
        description="The reservation number for the rental",
        patterns=[
            r"RESERVATION NUMBER\s*(\d+-[A-Z]+-\d+)",
        ],
        transformations=["clean_text"],
    ),
    "plateNumber": field_definition(
        "Plate Number",
        description="License plate number of the vehicle",
        patterns=[
            r"Plate Number\s*:\s*([A-Z0-9\s]+?)(?=\s{2,}|$|\n)",
        ],
        transformations=["clean_text"],
    ),
    "pickupDateTime": field_definition(
        "Pickup Date/Time",
        description="Date and time of vehicle pickup",
        patterns=[
            r"Pickup Date/Time\s*:\s*([A-Z0-9,@\s:]+(?:AM|PM))",
        ],
        transformations=["clean_text"],
    ),
    "returnDateTime": field_definition(
        "Return Date/Time",
        description="Date and time of scheduled vehicle return",
        patterns=[
            r"Return Date/Time\s*:\s*([A-Z0-9,@\s:]+(?:AM|PM))",
        ],
        transformations=["clean_text"],
    ),
}


STANDARD_RENTAL_AGREEMENT = TemplateDefinition(
    id=STANDARD_RENTAL_AGREEMENT_ID,
    name="Standard Rental Agreement",
    description="Standard format for rental agreements",
    version="1.0",
    fields=STANDARD_FIELDS,
)


# Budget agreements print a shorter RA number. Only fields that differ from
# the standard template are declared; the registry merges the rest in.
BUDGET_RENTAL_AGREEMENT = TemplateDefinition(
    id=BUDGET_RENTAL_AGREEMENT_ID,
    name="Budget Rental Agreement",
    description="Budget-specific format for rental agreements",
    version="1.0",
    parent_template_id=STANDARD_RENTAL_AGREEMENT_ID,
    fields={
        "raNumber": field_definition(
            "Rental Agreement Number",
            description="The unique identifier for the rental agreement",
            required=True,
            patterns=[
                r"RA(?:Number|#|No)[:\s]*([A-Z0-9-]{6,8})",
                r"Budget RA[:\s]*([A-Z0-9-]{6,8})",
            ],
            validations=["is_not_empty"],
            transformations=["clean_text", "to_upper_case"],
        ),
    },
)


RENTAL_AGREEMENT_TEMPLATES = (
    STANDARD_RENTAL_AGREEMENT,
    BUDGET_RENTAL_AGREEMENT,
)
