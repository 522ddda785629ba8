from .common import *
from .push import DISCORD_WEBHOOK_PREFIX, DiscordPushHandler
