"""
CLI 模块

命令行接口实现。
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Optional

import click
import toml
import yaml
from loguru import logger

from iconfont_updater import __version__
from iconfont_updater.exceptions import ConfigError, IconfontUpdaterError
from iconfont_updater.logger import setup_logger
from iconfont_updater.models import UpdateResult, UpdaterConfig, normalize_keys
from iconfont_updater.updater import run_update_cycle


def load_config(config_path: str) -> Dict[str, Any]:
    """加载配置文件（TOML / YAML，其余后缀按 JSON 解析）"""
    path = Path(config_path)

    if not path.exists():
        raise click.ClickException(f"配置文件不存在: {config_path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".toml":
            data = toml.loads(path.read_text(encoding="utf-8"))
        elif suffix in (".yaml", ".yml"):
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        else:
            # 其他文件名（如 .iconfontrc）按 JSON 解析
            data = json.loads(path.read_text(encoding="utf-8"))
    except (ValueError, toml.TomlDecodeError, yaml.YAMLError) as e:
        raise click.ClickException(f"配置文件解析失败: {e}")

    if not isinstance(data, dict):
        raise click.ClickException("配置文件顶层必须是对象")
    return data


def build_config(
    config_file: Optional[str], cli_options: Dict[str, Any]
) -> UpdaterConfig:
    """按 默认值 < 配置文件 < 命令行参数 的顺序合并配置"""
    file_options = load_config(config_file) if config_file else {}

    merged = {**normalize_keys(file_options), **normalize_keys(cli_options)}
    if not merged.get("source_url"):
        raise click.UsageError("必须提供 --url 参数，使用 --help 查看帮助信息")

    try:
        return UpdaterConfig.from_dict(file_options, cli_options)
    except ConfigError as e:
        raise click.ClickException(str(e))


async def run_async(config: UpdaterConfig) -> UpdateResult:
    """异步运行"""
    return await run_update_cycle(config)


@click.command()
@click.option("-u", "--url", help="图标库 CSS 的 URL 地址")
@click.option("-o", "--output", help="输出文件路径 (默认: ./iconfont.css)")
@click.option("-b", "--backup-dir", help="备份目录 (默认: ./backup)")
@click.option("-m", "--max-backups", type=int, help="最多保留的备份数量 (默认: 5)")
@click.option("-t", "--timeout", type=int, help="单次请求超时毫秒数 (默认: 30000)")
@click.option("--max-redirects", type=int, help="最多跟随的重定向次数 (默认: 10)")
@click.option(
    "-c", "--config", "config_file", help="配置文件路径 (JSON / TOML / YAML)，未知后缀按 JSON 解析"
)
@click.option("--debug", is_flag=True, help="启用调试模式")
@click.version_option(version=__version__)
def main(
    url: Optional[str],
    output: Optional[str],
    backup_dir: Optional[str],
    max_backups: Optional[int],
    timeout: Optional[int],
    max_redirects: Optional[int],
    config_file: Optional[str],
    debug: bool,
):
    """iconfont-updater - 图标 CSS 自动更新工具

    \b
    示例:
      iconfont-updater --url https://at.alicdn.com/t/c/font_xxx.css
      iconfont-updater -u https://at.alicdn.com/t/c/font_xxx.css -o ./static/font/iconfont.css
      iconfont-updater --config iconfont.config.json
    """
    setup_logger(debug=debug)

    cli_options = {
        "source_url": url,
        "output_path": output,
        "backup_dir": backup_dir,
        "max_backups": max_backups,
        "timeout_ms": timeout,
        "max_redirects": max_redirects,
    }

    config = build_config(config_file, cli_options)
    logger.debug(f"配置: {config.to_dict()}")

    try:
        result = asyncio.run(run_async(config))
    except IconfontUpdaterError as e:
        raise click.ClickException(str(e))
    except Exception as e:
        logger.exception(f"运行时错误: {e}")
        raise click.ClickException(f"运行时错误: {e}")

    logger.debug(f"结果: {result.to_dict()}")
    status = "updated" if result.updated else "unchanged"
    click.echo(f"{status} {result.hash}")


if __name__ == "__main__":
    main()
