"""Internal constants shared across the library."""

BASE_URL = "https://api.thingspeak.com"
USER_AGENT = "carsim/1"

UPDATE_ENDPOINT = "/update"
FEEDS_ENDPOINT_TEMPLATE = "/channels/{channel_id}/feeds.json"

#: Timestamp format accepted by the channel feed ``start``/``end`` parameters.
FEED_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# ------------------------------------------------------------------
# Vehicle model limits
# ------------------------------------------------------------------

MIN_SPEED = 0.0
MAX_SPEED = 120.0
IDLE_RPM = 800.0
MAX_RPM = 6000.0
FULL_TANK = 100.0

#: Fuel percentage burnt per second at full load (max speed, max RPM).
MAX_FUEL_CONSUMPTION_PER_SECOND = 0.005

ACCELERATING_BELOW = 30.0
DECELERATING_FROM = 90.0

BASE_ENGINE_TEMP = 85.0
MIN_ENGINE_TEMP = 80.0
MAX_ENGINE_TEMP = 110.0
ENGINE_TEMP_NOISE_STOP = 15

#: Decimal places used for transmitted values.
READING_PRECISION = 2
