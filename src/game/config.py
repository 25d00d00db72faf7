# --- Display ---
WIDTH = 1280
HEIGHT = 720
FPS = 60
WINDOW_TITLE = "Flapp Birb"
PIXEL_RATIO = 4.5           # sprite pixels -> world units
MAX_DT = 1.0 / 30.0         # clamp frame stalls (s)

# --- Actor ---
FLAP_FORCE = 400.0          # upward velocity set on flap (units/s)
GRAVITY = 1600.0            # units/s^2, pulls down
VELOCITY_ROT_RATIO = 7.2    # vy / ratio = tilt in degrees
MAX_TILT_DEG = 90.0
ACTOR_W = 17                # sprite size (pixels, before PIXEL_RATIO)
ACTOR_H = 12

# --- Obstacles ---
OBSTACLE_AMOUNT = 8             # pairs alive at once
OBSTACLE_WIDTH = 32.0           # sprite pixels
OBSTACLE_HEIGHT = 144.0
OBSTACLE_VERTICAL_OFFSET = 30.0 # random pair offset range (+/-, sprite pixels)
OBSTACLE_GAP = 16.0             # half opening between members (sprite pixels)
OBSTACLE_SPACING = 64.0         # horizontal pair spacing (sprite pixels)
OBSTACLE_SCROLL_SPEED = 120.0   # units/s, NOT scaled by PIXEL_RATIO
MERCY_ZONE = 5.0                # hitbox shrink (sprite pixels)

SEED_DEFAULT = 12345

# --- Pause overlay ---
PAUSE_TEXT_1 = "Flap Flap Away~"
PAUSE_TEXT_2 = "press [space] to start."
PAUSE_TEXT_SIZE = 28
SCORE_DISPLAY = "Score: "
SCORE_TEXT_SIZE = 10
SCORE_POS_PAD_X = 30
SCORE_POS_PAD_Y = 15

# --- Colors (RGB) ---
COLOR_BG = (128, 178, 204)
COLOR_PAUSE_TEXT = (255, 128, 51)
COLOR_SCORE_TEXT = (255, 255, 0)
COLOR_ACTOR = (250, 214, 60)
COLOR_ACTOR_EYE = (20, 20, 20)
COLOR_PIPE = (86, 170, 60)
COLOR_PIPE_RIM = (52, 110, 36)
COLOR_DIM = (0, 0, 0, 110)

# --- RL env ---
SCORE_REWARD = 5.0          # bonus per obstacle row passed
