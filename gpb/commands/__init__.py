from gpb.commands.deliver import deliver

__all__ = ["deliver"]
