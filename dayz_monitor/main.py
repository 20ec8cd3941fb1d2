import logging
import sys
import asyncio

from dotenv import load_dotenv
from dayz_monitor.config import MonitorConfig, load_config
from dayz_monitor.discord_bot import create

def init_logging(config: MonitorConfig):
    logging.basicConfig(filename=config.log_file, level=config.log_level)
    logging.getLogger().addHandler(logging.StreamHandler(sys.stdout))

async def amain():
    load_dotenv()

    config = load_config()
    init_logging(config)

    bot = create(config)
    await bot.start(config.discord_token)

def run():
    try:
        asyncio.run(amain())
    except KeyboardInterrupt:
        pass

if __name__ == "__main__":
    run()
