import sys

from rich.pretty import pprint

from confline import *

__prog__ = "confline-demo"

registry = [
    Component("core", (
        OptionDescriptor("interface", Kind.HINT, text="Interface settings"),
        OptionDescriptor("verbose", Kind.INTEGER, short="v"),
        OptionDescriptor("quiet", Kind.BOOL, short="q"),
        OptionDescriptor("intf", Kind.MODULE, short="I"),
    )),
    Component("video", (
        OptionDescriptor("fullscreen", Kind.BOOL, short="f"),
        OptionDescriptor("zoom", Kind.FLOAT),
        OptionDescriptor("key-fullscreen", Kind.KEY),
        OptionDescriptor("vout-filter", Kind.MODULE_LIST, replacement="video-filter"),
        OptionDescriptor("video-filter", Kind.MODULE_LIST),
    )),
]


if __name__ == '__main__':
    store = ConfigStore()
    status = load_command_line(DescriptorIndex.from_components(registry), sys.argv, True, store=store)
    pprint(store)
    sys.exit(-status)
