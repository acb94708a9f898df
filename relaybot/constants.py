# Anti-spam : une notification par salon toutes les 60s max
NOTIFICATION_INTERVAL_SECONDS = 60

# Timeout appliqué à tous les appels sortants (x.gd, LINE Notify, API Discord)
HTTP_TIMEOUT_SECONDS = 10

SHORTENER_API_URL = "https://xgd.io/V1/shorten"
NOTIFY_API_URL = "https://notify-api.line.me/api/notify"

UNKNOWN_CHANNEL_NAME = "Unknown channel"

NOTIFICATION_TEMPLATE = "\n{channel}で{author}からの発言\n--------\n{content}\n-------- {link}"
