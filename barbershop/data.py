# barbershop/data.py

from datetime import time

APPOINTMENT_STATUSES = ("pending", "confirmed", "cancelled")

# day_of_week -> (start, end, is_active)
DEFAULT_WEEK = {
    0: (time(9, 0), time(19, 0), True),
    1: (time(9, 0), time(19, 0), True),
    2: (time(9, 0), time(19, 0), True),
    3: (time(9, 0), time(19, 0), True),
    4: (time(9, 0), time(19, 0), True),
    5: (time(9, 0), time(18, 0), True),
    6: (time(0, 0), time(0, 0), False),
}

# key -> (default value, label, category)
DEFAULT_SETTINGS = {
    "phone": ("47 9961-3570", "Phone", "contact"),
    "whatsapp": ("5547996135570", "WhatsApp", "contact"),
    "address": ("R Monsenhor Gercino 5207 - Jarivatuba", "Address", "address"),
    "city": ("Joinville, SC", "City", "address"),
    "instagram": ("BARBEARIA.ARTCABELO", "Instagram", "social"),
    "facebook": ("", "Facebook", "social"),
    "hours_weekday": ("09:00 - 19:00", "Weekdays", "hours"),
    "hours_saturday": ("09:00 - 18:00", "Saturday", "hours"),
    "hours_sunday": ("Fechado", "Sunday", "hours"),
}
