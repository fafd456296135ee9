from enum import Enum

from rich.console import Console
from rich.pretty import pprint

from optionary import *


class Strategy(Enum):
    ROLLING = "rolling"
    BLUE_GREEN = "blue-green"


class Deploy:
    def __init__(self):
        self.regions = ["eu-west-1", "us-east-1"]
        self.region = None
        self.strategy = Strategy.ROLLING
        self.dry = False

    @option("region", descr="where to deploy")
    def setRegion(self, region):
        self.region = region

    @option("strategy", descr="how instances are replaced")
    def setStrategy(self, strategy: Strategy):
        self.strategy = strategy

    @option("dry-run", descr="print the plan only")
    def setDryRun(self):
        self.dry = True

    @values("region")
    def availableRegions(self) -> list[str]:
        return self.regions


if __name__ == '__main__':
    deploy = Deploy()
    Console().print(listing(OptionReader().descriptors(deploy)))
    pprint(vars(configure(deploy, {"region": ["us-east-1"], "dry-run": []}, shell=True)))
