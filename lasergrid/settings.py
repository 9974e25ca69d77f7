from dataclasses import dataclass


@dataclass(frozen=True)
class BoardSettings:
    size: int = 8
    minimum_combine_length: int = 3
    allow_diagonal_placement: bool = False
    # 以下开关只随棋盘一起保存和传输，规则引擎不读取 fixed_start / ruins
    fixed_start: bool = True
    auto_upgrade: bool = True
    ruins: bool = False

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(f"Board size must be positive, got {self.size}")
        if self.minimum_combine_length < 1:
            raise ValueError(
                f"minimum_combine_length must be positive, got {self.minimum_combine_length}"
            )


DEFAULT_SETTINGS = BoardSettings()
