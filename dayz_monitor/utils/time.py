from datetime import datetime
import pytz


def now_in(tz_name: str = "UTC"):
    return datetime.now(pytz.timezone(tz_name))

def fmt_updated(dtobj):
    return dtobj.strftime("%Y-%m-%d %H:%M:%S %Z")
