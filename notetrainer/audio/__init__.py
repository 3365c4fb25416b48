from .synthesis import SamplePlayer, SilentPlayer
from .playback import FluidSynthPlayer, make_player_from_config

__all__ = ["SamplePlayer", "SilentPlayer", "FluidSynthPlayer", "make_player_from_config"]
