# Suggested categories shown by the forms; records may use any text.
INCOME_CATEGORIES = [
    "เงินเดือน",
    "รายได้เสริม",
    "ค่าฟรีแลนซ์",
    "ดอกเบี้ย",
    "ปันผล",
    "ของขวัญ/เงินช่วย",
    "ขายของ",
    "อื่นๆ",
]

EXPENSE_CATEGORIES = [
    "อาหาร",
    "เครื่องดื่ม",
    "เดินทาง",
    "ที่พัก",
    "ค่าน้ำ/ค่าไฟ",
    "โทรศัพท์/เน็ต",
    "ของใช้",
    "เสื้อผ้า",
    "สุขภาพ",
    "บันเทิง",
    "การศึกษา",
    "ออม/ลงทุน",
    "อื่นๆ",
]


def format_baht(amount) -> str:
    """Format an amount as Thai baht, e.g. ``฿1,234.50``."""
    amount = float(amount or 0)
    sign = "-" if amount < 0 else ""
    return f"{sign}฿{abs(amount):,.2f}"
