from podsmith.details.targets.aggregate_target import AggregateTarget
from podsmith.generators.base import Generator


# Gives the aggregate target one compiled file so Xcode produces a product
class DummySource(Generator):
    def __init__(self, target: AggregateTarget):
        self.target = target

    @property
    def class_name(self) -> str:
        return f"PodsDummy_{self.target.product_module_name}"

    def generate(self) -> str:
        return (
            "#import <Foundation/Foundation.h>\n"
            f"@interface {self.class_name} : NSObject\n"
            "@end\n"
            f"@implementation {self.class_name}\n"
            "@end\n"
        )
