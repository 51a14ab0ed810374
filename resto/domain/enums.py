# resto/domain/enums.py
from enum import Enum


class Category(str, Enum):
    MAIN = "MAIN"
    APPETIZER = "APPETIZER"
    DRINK = "DRINK"


class DiningType(str, Enum):
    DINE_IN = "DINE_IN"
    TAKE_AWAY = "TAKE_AWAY"


class PaymentChoice(str, Enum):
    CASH = "CASH"
    CASHLESS = "CASHLESS"


class OrderStatus(str, Enum):
    AWAITING_PAYMENT = "AWAITING_PAYMENT"
    PAID = "PAID"
