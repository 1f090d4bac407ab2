from podsmith.generators.xcode.project import NativeTarget, PodsProject
