from datetime import datetime



# Simply returns the current local time as an ISO8601 string with timezone offset.
def now_iso():
    return datetime.now().astimezone().isoformat()


# Splits a comma separated environment value into a clean list, e.g. "hifitime, stdtime" -> ["hifitime", "stdtime"]
def split_csv(value):
    return [part.strip() for part in value.split(",") if part.strip()]
