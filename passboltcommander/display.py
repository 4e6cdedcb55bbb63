#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

from colorama import init, Fore

from . import __version__

init()


class bcolors:
    HEADER = '\033[95m'
    OKBLUE = '\033[94m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    UNDERLINE = '\033[4m'


ACTION_COLORS = {
    'create': 'green',
    'update': 'yellow',
    'delete': 'red',
    'noop': 'gray',
}


def passbolt_colorize(text, color):
    if color == 'red':
        return f'{Fore.RED}{text}{Fore.RESET}'
    if color == 'green':
        return f'{Fore.GREEN}{text}{Fore.RESET}'
    if color == 'yellow':
        return f'{Fore.YELLOW}{text}{Fore.RESET}'
    if color == 'gray':
        return f'{Fore.LIGHTBLACK_EX}{text}{Fore.RESET}'
    return text


def format_action(action, colorize=True):    # type: (str, bool) -> str
    if colorize:
        return passbolt_colorize(action, ACTION_COLORS.get(action))
    return action


def welcome():
    print('\n')
    print(bcolors.OKBLUE + '  ___              _         _ _' + bcolors.ENDC)
    print(bcolors.OKBLUE + ' | _ \\__ _ ______ | |__  ___| | |_' + bcolors.ENDC)
    print(bcolors.OKBLUE + ' |  _/ _` (_-<_-< | \'_ \\/ _ \\ |  _|' + bcolors.ENDC)
    print(bcolors.OKBLUE + ' |_| \\__,_/__/__/ |_.__/\\___/_|\\__|' + bcolors.ENDC)
    print('')
    print(bcolors.BOLD + f' Passbolt Commander v{__version__}' + bcolors.ENDC)
    print(' Type "help" to list commands, "q" to quit')
    print('')
