"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスなどを定義します。
"""
from typing import List, NamedTuple, Tuple

# @intent:data_structure フレームバッファの読み取り専用表現。行(y)ごとのタプルに、列(x)ごとの点灯状態が並びます。
# CPU, UI など複数のレイヤーで共通して使用されます。
DisplayGrid = Tuple[Tuple[bool, ...], ...]

# @intent:data_structure 単一のレジスタの表示定義。UIが動的にフィールドを生成するために使用される。
class RegisterInfo(NamedTuple):
    name: str
    width: int  # ビット幅 (8 or 16)

# @intent:data_structure レジスタグループの表示定義。関連するレジスタ（例: "General", "Timers"）をまとめる。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
