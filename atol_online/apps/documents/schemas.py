from enum import Enum


class DocumentType(str, Enum):
    receipt = "receipt"        # Чек прихода, расхода и возвратов
    correction = "correction"  # Чек коррекции


class SnoType(str, Enum):
    osn = "osn"                                  # Общая СН
    usn_income = "usn_income"                    # УСН (доходы)
    usn_income_outcome = "usn_income_outcome"    # УСН (доходы минус расходы)
    esn = "esn"                                  # ЕСХН
    patent = "patent"                            # Патентная СН


class VatType(str, Enum):
    none = "none"        # Без НДС
    vat0 = "vat0"        # НДС 0%
    vat5 = "vat5"        # НДС 5%
    vat7 = "vat7"        # НДС 7%
    vat10 = "vat10"      # НДС 10%
    vat20 = "vat20"      # НДС 20%
    vat105 = "vat105"    # НДС 5/105
    vat107 = "vat107"    # НДС 7/107
    vat110 = "vat110"    # НДС 10/110
    vat120 = "vat120"    # НДС 20/120


class PaymentMethod(str, Enum):
    full_prepayment = "full_prepayment"  # Предоплата 100%
    prepayment = "prepayment"            # Частичная предоплата
    advance = "advance"                  # Аванс
    full_payment = "full_payment"        # Полный расчёт
    partial_payment = "partial_payment"  # Частичный расчёт и кредит
    credit = "credit"                    # Передача в кредит
    credit_payment = "credit_payment"    # Оплата кредита


class PaymentObject(int, Enum):
    general_goods = 1              # Товар
    excise_goods = 2               # Подакцизный товар
    service_work = 3               # Работа
    service = 4                    # Услуга
    gambling_bet = 5               # Ставка азартной игры
    gambling_win = 6               # Выигрыш азартной игры
    lottery_sale = 7               # Лотерейный билет
    lottery_win = 8                # Выигрыш лотереи
    intellectual_property = 9      # Предоставление РИД
    prepayment = 10                # Платёж
    agent_reward = 11              # Агентское вознаграждение
    payment_fees = 12              # Выплата
    other_items = 13               # Иной предмет расчёта
    property_rights = 14           # Имущественное право
    non_operating_income = 15      # Внереализационный доход
    tax_deductible = 16            # Страховые взносы
    trade_levy = 17                # Торговый сбор
    tourism_tax = 18               # Курортный сбор
    deposit = 19                   # Залог
    expense_deduction = 20         # Расход
    pension_individual = 21        # Взносы на ОПС ИП
    pension_organization = 22      # Взносы на ОПС
    health_individual = 23         # Взносы на ОМС ИП
    health_organization = 24       # Взносы на ОМС
    social_insurance = 25          # Взносы на ОСС
    casino_operations = 26         # Платёж казино
    bank_agent_payout = 27         # Выдача денежных средств
    excise_marked_no_code = 30     # Подакцизный маркированный без кода
    excise_marked_with_code = 31   # Подакцизный маркированный с кодом
    marked_no_code = 32            # Маркированный без кода
    marked_with_code = 33          # Маркированный с кодом


class Measure(int, Enum):
    piece = 0                # Штуки, единицы
    gram = 10
    kilogram = 11
    ton = 12
    centimeter = 20
    decimeter = 21
    meter = 22
    square_centimeter = 30
    square_decimeter = 31
    square_meter = 32
    milliliter = 40
    liter = 41
    cubic_meter = 42
    kilowatt_hour = 50
    gigacalorie = 51
    day = 70
    hour = 71
    minute = 72
    second = 73
    kilobyte = 80
    megabyte = 81
    gigabyte = 82
    terabyte = 83
    other = 255              # Иные единицы


class PaymentType(int, Enum):
    cash = 0          # Наличные
    electronic = 1    # Безналичный расчёт
    prepaid = 2       # Предварительная оплата (аванс)
    credit = 3        # Последующая оплата (кредит)
    other = 4         # Встречное предоставление
    extended_5 = 5    # Расширенные виды оплаты
    extended_6 = 6
    extended_7 = 7
    extended_8 = 8
    extended_9 = 9


class AgentType(str, Enum):
    bank_paying_agent = "bank_paying_agent"        # Банковский платёжный агент
    bank_paying_subagent = "bank_paying_subagent"  # Банковский платёжный субагент
    paying_agent = "paying_agent"                  # Платёжный агент
    paying_subagent = "paying_subagent"            # Платёжный субагент
    attorney = "attorney"                          # Поверенный
    commission_agent = "commission_agent"          # Комиссионер
    another = "another"                            # Другой агент


class CorrectionType(str, Enum):
    self_ = "self"               # Самостоятельно
    instruction = "instruction"  # По предписанию


class DocumentCode(int, Enum):
    passport_rf = 21                   # Паспорт гражданина РФ
    passport_rf_foreign = 22           # Заграничный паспорт гражданина РФ
    temporary_id = 26                  # Временное удостоверение личности
    birth_certificate = 27             # Свидетельство о рождении
    other_rf = 28                      # Иные документы гражданина РФ
    foreign_passport = 31              # Паспорт иностранного гражданина
    foreign_other = 32                 # Иные документы иностранного гражданина
    residence_permit = 33              # Вид на жительство
    temporary_residence_permit = 34    # Разрешение на временное проживание
    refugee_certificate = 35           # Свидетельство о рассмотрении ходатайства
    temporary_asylum = 36              # Удостоверение беженца
    stateless_other = 37               # Иные документы лица без гражданства
    another = 40                       # Иные документы


class MarkCodeType(str, Enum):
    unknown = "unknown"    # Код неопознанного формата
    ean8 = "ean8"
    ean13 = "ean13"
    itf14 = "itf14"
    gs10 = "gs10"
    gs1m = "gs1m"
    short = "short"
    fur = "fur"            # Контрольно-идентификационный знак мехов
    egais20 = "egais20"
    egais30 = "egais30"
