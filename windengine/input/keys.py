"""Key codes, key actions and the mapping from SDL key and button codes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class KeyAction(Enum):
    """What happened to a key or button."""

    UNKNOWN = 0
    PRESSED = 1
    HELD = 2
    RELEASED = 3


class Keycode(IntEnum):
    """Engine key codes.

    Keyboard codes share their values with SDL key codes; mouse and
    aggregate codes follow the last keyboard code.
    """

    UNKNOWN = 0
    K_RETURN = 13
    K_ESCAPE = 27
    K_BACKSPACE = 8
    K_TAB = 9
    K_SPACE = 32
    K_EXCLAIM = 33
    K_QUOTE_DBL = 34
    K_HASH = 35
    K_PERCENT = 37
    K_DOLLAR = 36
    K_AMPERSAND = 38
    K_QUOTE = 39
    K_LEFT_PAREN = 40
    K_RIGHT_PAREN = 41
    K_ASTERISK = 42
    K_PLUS = 43
    K_COMMA = 44
    K_MINUS = 45
    K_PERIOD = 46
    K_SLASH = 47
    K_0 = 48
    K_1 = 49
    K_2 = 50
    K_3 = 51
    K_4 = 52
    K_5 = 53
    K_6 = 54
    K_7 = 55
    K_8 = 56
    K_9 = 57
    K_COLON = 58
    K_SEMICOLON = 59
    K_LESS = 60
    K_EQUALS = 61
    K_GREATER = 62
    K_QUESTION = 63
    K_AT = 64
    K_LEFT_BRACKET = 91
    K_BACKSLASH = 92
    K_RIGHT_BRACKET = 93
    K_CARET = 94
    K_UNDERSCORE = 95
    K_BACK_QUOTE = 96
    K_A = 97
    K_B = 98
    K_C = 99
    K_D = 100
    K_E = 101
    K_F = 102
    K_G = 103
    K_H = 104
    K_I = 105
    K_J = 106
    K_K = 107
    K_L = 108
    K_M = 109
    K_N = 110
    K_O = 111
    K_P = 112
    K_Q = 113
    K_R = 114
    K_S = 115
    K_T = 116
    K_U = 117
    K_V = 118
    K_W = 119
    K_X = 120
    K_Y = 121
    K_Z = 122
    K_CAPS_LOCK = 1073741881
    K_F1 = 1073741882
    K_F2 = 1073741883
    K_F3 = 1073741884
    K_F4 = 1073741885
    K_F5 = 1073741886
    K_F6 = 1073741887
    K_F7 = 1073741888
    K_F8 = 1073741889
    K_F9 = 1073741890
    K_F10 = 1073741891
    K_F11 = 1073741892
    K_F12 = 1073741893
    K_PRINT_SCREEN = 1073741894
    K_SCROLL_LOCK = 1073741895
    K_PAUSE = 1073741896
    K_INSERT = 1073741897
    K_HOME = 1073741898
    K_PAGE_UP = 1073741899
    K_DELETE = 127
    K_END = 1073741901
    K_PAGE_DOWN = 1073741902
    K_RIGHT = 1073741903
    K_LEFT = 1073741904
    K_DOWN = 1073741905
    K_UP = 1073741906
    K_NUM_LOCK_CLEAR = 1073741907
    K_KP_DIVIDE = 1073741908
    K_KP_MULTIPLY = 1073741909
    K_KP_MINUS = 1073741910
    K_KP_PLUS = 1073741911
    K_KP_ENTER = 1073741912
    K_KP_1 = 1073741913
    K_KP_2 = 1073741914
    K_KP_3 = 1073741915
    K_KP_4 = 1073741916
    K_KP_5 = 1073741917
    K_KP_6 = 1073741918
    K_KP_7 = 1073741919
    K_KP_8 = 1073741920
    K_KP_9 = 1073741921
    K_KP_0 = 1073741922
    K_KP_PERIOD = 1073741923
    K_APPLICATION = 1073741925
    K_POWER = 1073741926
    K_KP_EQUALS = 1073741927
    K_F13 = 1073741928
    K_F14 = 1073741929
    K_F15 = 1073741930
    K_F16 = 1073741931
    K_F17 = 1073741932
    K_F18 = 1073741933
    K_F19 = 1073741934
    K_F20 = 1073741935
    K_F21 = 1073741936
    K_F22 = 1073741937
    K_F23 = 1073741938
    K_F24 = 1073741939
    K_EXECUTE = 1073741940
    K_HELP = 1073741941
    K_MENU = 1073741942
    K_SELECT = 1073741943
    K_STOP = 1073741944
    K_AGAIN = 1073741945
    K_UNDO = 1073741946
    K_CUT = 1073741947
    K_COPY = 1073741948
    K_PASTE = 1073741949
    K_FIND = 1073741950
    K_MUTE = 1073741951
    K_VOLUME_UP = 1073741952
    K_VOLUME_DOWN = 1073741953
    K_KP_COMMA = 1073741957
    K_KP_EQUALS_AS400 = 1073741958
    K_ALT_ERASE = 1073741977
    K_SYS_REQ = 1073741978
    K_CANCEL = 1073741979
    K_CLEAR = 1073741980
    K_PRIOR = 1073741981
    K_RETURN2 = 1073741982
    K_SEPARATOR = 1073741983
    K_OUT = 1073741984
    K_OPER = 1073741985
    K_CLEAR_AGAIN = 1073741986
    K_CRSEL = 1073741987
    K_EXSEL = 1073741988
    K_KP_00 = 1073742000
    K_KP_000 = 1073742001
    K_THOUSANDS_SEPARATOR = 1073742002
    K_DECIMAL_SEPARATOR = 1073742003
    K_CURRENCY_UNIT = 1073742004
    K_CURRENCY_SUB_UNIT = 1073742005
    K_KP_LEFT_PAREN = 1073742006
    K_KP_RIGHT_PAREN = 1073742007
    K_KP_LEFT_BRACE = 1073742008
    K_KP_RIGHT_BRACE = 1073742009
    K_KP_TAB = 1073742010
    K_KP_BACKSPACE = 1073742011
    K_KP_A = 1073742012
    K_KP_B = 1073742013
    K_KP_C = 1073742014
    K_KP_D = 1073742015
    K_KP_E = 1073742016
    K_KP_F = 1073742017
    K_KP_XOR = 1073742018
    K_KP_POWER = 1073742019
    K_KP_PERCENT = 1073742020
    K_KP_LESS = 1073742021
    K_KP_GREATER = 1073742022
    K_KP_AMPERSAND = 1073742023
    K_KP_DBL_AMPERSAND = 1073742024
    K_KP_VERTICAL_BAR = 1073742025
    K_KP_DBL_VERTICAL_BAR = 1073742026
    K_KP_COLON = 1073742027
    K_KP_HASH = 1073742028
    K_KP_SPACE = 1073742029
    K_KP_AT = 1073742030
    K_KP_EXCLAM = 1073742031
    K_KP_MEM_STORE = 1073742032
    K_KP_MEM_RECALL = 1073742033
    K_KP_MEM_CLEAR = 1073742034
    K_KP_MEM_ADD = 1073742035
    K_KP_MEM_SUBTRACT = 1073742036
    K_KP_MEM_MULTIPLY = 1073742037
    K_KP_MEM_DIVIDE = 1073742038
    K_KP_PLUS_MINUS = 1073742039
    K_KP_CLEAR = 1073742040
    K_KP_CLEAR_ENTRY = 1073742041
    K_KP_BINARY = 1073742042
    K_KP_OCTAL = 1073742043
    K_KP_DECIMAL = 1073742044
    K_KP_HEXADECIMAL = 1073742045
    K_LEFT_CTRL = 1073742048
    K_LEFT_SHIFT = 1073742049
    K_LEFT_ALT = 1073742050
    K_LEFT_GUI = 1073742051
    K_RIGHT_CTRL = 1073742052
    K_RIGHT_SHIFT = 1073742053
    K_RIGHT_ALT = 1073742054
    K_RIGHT_GUI = 1073742055
    K_MODE = 1073742081
    K_AUDIO_NEXT = 1073742082
    K_AUDIO_PREV = 1073742083
    K_AUDIO_STOP = 1073742084
    K_AUDIO_PLAY = 1073742085
    K_AUDIO_MUTE = 1073742086
    K_MEDIA_SELECT = 1073742087
    K_WWW = 1073742088
    K_MAIL = 1073742089
    K_CALCULATOR = 1073742090
    K_COMPUTER = 1073742091
    K_AC_SEARCH = 1073742092
    K_AC_HOME = 1073742093
    K_AC_BACK = 1073742094
    K_AC_FORWARD = 1073742095
    K_AC_STOP = 1073742096
    K_AC_REFRESH = 1073742097
    K_AC_BOOKMARKS = 1073742098
    K_BRIGHTNESS_DOWN = 1073742099
    K_BRIGHTNESS_UP = 1073742100
    K_DISPLAY_SWITCH = 1073742101
    K_KBDILLUM_TOGGLE = 1073742102
    K_KBDILLUM_DOWN = 1073742103
    K_KBDILLUM_UP = 1073742104
    K_EJECT = 1073742105
    K_SLEEP = 1073742106

    M_BUTTON_LEFT = 1073742107
    M_BUTTON_RIGHT = 1073742108
    M_BUTTON_MIDDLE = 1073742109

    M_MOVE = 1073742110
    M_SCROLL_DOWN = 1073742111
    M_SCROLL_UP = 1073742112
    M_SCROLL = 1073742113

    K_ALL_KEYS = 1073742114
    K_ALL_CHARS = 1073742115
    M_ALL_KEYS = 1073742116
    M_ALL_EVENTS = 1073742117
    ALL_EVENTS = 1073742118


@dataclass(frozen=True)
class Key:
    """A key code together with the action performed on it."""

    keycode: Keycode = Keycode.UNKNOWN
    action: KeyAction = KeyAction.UNKNOWN


# SDL mouse button numbers.
_SDL_BUTTON_LEFT = 1
_SDL_BUTTON_MIDDLE = 2
_SDL_BUTTON_RIGHT = 3

_SDL_BUTTONS: dict[int, Keycode] = {
    _SDL_BUTTON_LEFT: Keycode.M_BUTTON_LEFT,
    _SDL_BUTTON_RIGHT: Keycode.M_BUTTON_RIGHT,
    _SDL_BUTTON_MIDDLE: Keycode.M_BUTTON_MIDDLE,
}

_SDL_KEYS: dict[int, Keycode] = {
    int(code): code
    for code in Keycode
    if code is Keycode.UNKNOWN
    or (code.name.startswith("K_") and code < Keycode.M_BUTTON_LEFT)
}


def map_sdl_button_to_keycode(button: int) -> Keycode:
    """Map an SDL mouse button number to a key code; unknown buttons give UNKNOWN."""
    return _SDL_BUTTONS.get(button, Keycode.UNKNOWN)


def map_sdl_key_to_keycode(key: int) -> Keycode:
    """Map an SDL key code to a key code; unknown keys give UNKNOWN."""
    return _SDL_KEYS.get(key, Keycode.UNKNOWN)