"""Choice constants shared by record forms and tables"""

GENDER_CHOICES = [
    ("M", "Male"),
    ("F", "Female"),
    ("O", "Other"),
]

SPECIALIZATION_CHOICES = [
    ("CARDIOLOGY", "Cardiology"),
    ("DERMATOLOGY", "Dermatology"),
    ("EMERGENCY", "Emergency Medicine"),
    ("ENDOCRINOLOGY", "Endocrinology"),
    ("GASTROENTEROLOGY", "Gastroenterology"),
    ("GENERAL", "General Medicine"),
    ("NEUROLOGY", "Neurology"),
    ("ONCOLOGY", "Oncology"),
    ("ORTHOPEDICS", "Orthopedics"),
    ("PEDIATRICS", "Pediatrics"),
    ("PSYCHIATRY", "Psychiatry"),
    ("RADIOLOGY", "Radiology"),
    ("SURGERY", "Surgery"),
    ("UROLOGY", "Urology"),
    ("OTHER", "Other"),
]

STATUS_CHOICES = [
    ("ACTIVE", "Active"),
    ("INACTIVE", "Inactive"),
    ("COMPLETED", "Completed"),
]


def choice_label(choices, value) -> str:
    """Return the display label for a choice value, falling back to the value"""
    for choice_value, label in choices:
        if choice_value == value:
            return label
    return str(value) if value is not None else ""
