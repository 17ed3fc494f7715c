"""Ограничения схемы АТОЛ Онлайн v5 и номера тегов ФФД 1.2."""

import re
from decimal import Decimal

# Учётные данные
MAX_LENGTH_LOGIN = 100
MAX_LENGTH_PASSWORD = 100
MAX_LENGTH_CALLBACK_URL = 256

# Продавец и покупатель
MAX_LENGTH_EMAIL = 64
MAX_LENGTH_PAYMENT_ADDRESS = 256
MAX_LENGTH_LOCATION = 256
MAX_LENGTH_CLIENT_NAME = 256
MAX_LENGTH_CLIENT_ADDRESS = 256
MAX_LENGTH_CLIENT_DOCUMENT_DATA = 64
MAX_LENGTH_PHONE_DIGITS = 17

# Предмет расчёта
MAX_LENGTH_ITEM_NAME = 128
MAX_ITEM_PRICE = Decimal("42949672.95")
MAX_ITEM_QUANTITY = Decimal("99999.999")
MAX_ITEM_SUM = Decimal("42949672.95")
MAX_LENGTH_USER_DATA = 64
MIN_LENGTH_DECLARATION_NUMBER = 1
MAX_LENGTH_DECLARATION_NUMBER = 32
MAX_LENGTH_MARK_PROCESSING_MODE = 1

# Агенты и поставщики
MAX_LENGTH_PAYING_AGENT_OPERATION = 24
MAX_LENGTH_SUPPLIER_NAME = 256
MAX_LENGTH_MTO_NAME = 64
MAX_LENGTH_MTO_ADDRESS = 256

# Документ
MAX_COUNT_DOC_ITEMS = 100
MAX_COUNT_DOC_PAYMENTS = 10
MAX_COUNT_DOC_VATS = 6
MAX_LENGTH_CASHIER_NAME = 64
MAX_LENGTH_DEVICE_NUMBER = 20
MAX_LENGTH_ADD_CHECK_PROP = 16
MAX_LENGTH_ADD_USER_PROP_NAME = 64
MAX_LENGTH_ADD_USER_PROP_VALUE = 256
MAX_LENGTH_OPERATING_PROP_NAME = 64
MAX_LENGTH_OPERATING_PROP_VALUE = 64
MAX_LENGTH_SECTORAL_PROP_NUMBER = 32
MAX_LENGTH_SECTORAL_PROP_VALUE = 256
MAX_LENGTH_CORRECTION_BASE_NUMBER = 32

# Форматы дат
DATE_FORMAT = "%d.%m.%Y"
DATETIME_FORMAT = "%d.%m.%Y %H:%M:%S"

PATTERN_INN = re.compile(r"^(\d{10}|\d{12})$")
PATTERN_CASHIER_INN = re.compile(r"^\d{12}$")
PATTERN_OKSM_CODE = re.compile(r"^\d{3}$")
PATTERN_FEDERAL_ID = re.compile(r"^\d{3}$")
PATTERN_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PATTERN_FUR = re.compile(r"^[0-9A-Za-zА-Яа-я]{2}-[0-9A-Za-zА-Яа-я]{6}-[0-9A-Za-zА-Яа-я]{10}$")
PATTERN_CALLBACK_URL = re.compile(
    r"^https?://[0-9a-zA-Zа-яА-Я]([-.\w]*[0-9a-zA-Zа-яА-Я])*(:\d+)?"
    r"(/?)([a-zA-Z0-9а-яА-Я\-.?,'/\\+&=%$#_]*)?$"
)

# Теги ФФД 1.2
TAG_CLIENT_CONTACT = 1008
TAG_CLIENT_NAME = 1227
TAG_CLIENT_INN = 1228
TAG_CLIENT_BIRTHDATE = 1243
TAG_CLIENT_CITIZENSHIP = 1244
TAG_CLIENT_DOCUMENT_CODE = 1245
TAG_CLIENT_DOCUMENT_DATA = 1246
TAG_CLIENT_ADDRESS = 1254
TAG_COMPANY_EMAIL = 1117
TAG_COMPANY_INN = 1018
TAG_COMPANY_PAYMENT_ADDRESS = 1187
TAG_COMPANY_LOCATION = 1009
TAG_COMPANY_SNO = 1055
TAG_ITEM_NAME = 1030
TAG_ITEM_PRICE = 1079
TAG_ITEM_QUANTITY = 1023
TAG_ITEM_SUM = 1043
TAG_ITEM_MEASURE = 2108
TAG_ITEM_USER_DATA = 1191
TAG_ITEM_EXCISE = 1229
TAG_ITEM_COUNTRY_CODE = 1230
TAG_ITEM_DECLARATION_NUMBER = 1231
TAG_ITEM_MARK_QUANTITY = 1291
TAG_ITEM_MARK_PROCESSING_MODE = 2102
TAG_ITEM_MARK_CODE = 1163
TAG_ITEM_SECTORAL_PROPS = 1260
TAG_PAYING_AGENT_OPERATION = 1044
TAG_PAYING_AGENT_PHONES = 1073
TAG_RPO_PHONES = 1074
TAG_MTO_PHONES = 1075
TAG_MTO_NAME = 1026
TAG_MTO_ADDRESS = 1005
TAG_MTO_INN = 1016
TAG_SUPPLIER_PHONES = 1171
TAG_SUPPLIER_NAME = 1225
TAG_SUPPLIER_INN = 1226
TAG_PAYMENT_SUM = 1031
TAG_CASHIER = 1021
TAG_CASHIER_INN = 1203
TAG_DEVICE_NUMBER = 1036
TAG_ADD_CHECK_PROP = 1192
TAG_ADD_USER_PROP_NAME = 1085
TAG_ADD_USER_PROP_VALUE = 1086
TAG_OPERATING_CHECK_PROPS = 1270
TAG_SECTORAL_CHECK_PROPS = 1261
TAG_CORRECTION_TYPE = 1173
TAG_CORRECTION_BASE_DATE = 1178
TAG_CORRECTION_BASE_NUMBER = 1179
