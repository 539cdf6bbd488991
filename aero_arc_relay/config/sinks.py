"""Dataclasses and parsing for downstream sink blocks."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Callable, Iterator, Union

from aero_arc_relay.config.fields import (
    read_bool,
    read_duration,
    read_int,
    read_optional_section,
    read_section,
    read_str,
    read_str_list,
)


class SinkKind(str, Enum):
    S3 = "s3"
    GCS = "gcs"
    BIGQUERY = "bigquery"
    TIMESTREAM = "timestream"
    INFLUXDB = "influxdb"
    PROMETHEUS = "prometheus"
    ELASTICSEARCH = "elasticsearch"
    KAFKA = "kafka"
    FILE = "file"
    NATS = "nats"


@dataclass(slots=True)
class S3SinkConfig:
    bucket: str = ""
    region: str = ""
    access_key: str = ""
    secret_key: str = ""
    prefix: str = ""
    flush_interval: timedelta = field(default_factory=timedelta)
    queue_size: int = 0
    backpressure_policy: str = ""


@dataclass(slots=True)
class GCSSinkConfig:
    bucket: str = ""
    project_id: str = ""
    credentials: str = ""  # service account JSON path
    prefix: str = ""
    flush_interval: timedelta = field(default_factory=timedelta)
    queue_size: int = 0
    backpressure_policy: str = ""


@dataclass(slots=True)
class BigQuerySinkConfig:
    project_id: str = ""
    dataset: str = ""
    table: str = ""
    credentials: str = ""
    batch_size: int = 0
    flush_interval: str = ""
    queue_size: int = 0
    backpressure_policy: str = ""


@dataclass(slots=True)
class TimestreamSinkConfig:
    database: str = ""
    table: str = ""
    region: str = ""
    access_key: str = ""
    secret_key: str = ""
    session_token: str = ""
    batch_size: int = 0
    flush_interval: str = ""
    queue_size: int = 0
    backpressure_policy: str = ""


@dataclass(slots=True)
class InfluxDBSinkConfig:
    url: str = ""
    database: str = ""
    username: str = ""
    password: str = ""
    # token/organization/bucket are InfluxDB 2.x only
    token: str = ""
    organization: str = ""
    bucket: str = ""
    batch_size: int = 0
    flush_interval: str = ""
    queue_size: int = 0
    backpressure_policy: str = ""


@dataclass(slots=True)
class PrometheusSinkConfig:
    url: str = ""
    job: str = ""
    instance: str = ""
    batch_size: int = 0
    flush_interval: str = ""
    queue_size: int = 0
    backpressure_policy: str = ""


@dataclass(slots=True)
class ElasticsearchSinkConfig:
    urls: list[str] = field(default_factory=list)
    index: str = ""
    username: str = ""
    password: str = ""
    api_key: str = ""
    batch_size: int = 0
    flush_interval: str = ""
    queue_size: int = 0
    backpressure_policy: str = ""


@dataclass(slots=True)
class KafkaSinkConfig:
    brokers: list[str] = field(default_factory=list)
    topic: str = ""
    queue_size: int = 0
    backpressure_policy: str = ""


@dataclass(slots=True)
class FileSinkConfig:
    path: str = ""
    prefix: str = ""
    format: str = ""
    rotation_interval: timedelta = field(default_factory=timedelta)
    queue_size: int = 0
    backpressure_policy: str = ""


@dataclass(slots=True)
class NATSStreamConfig:
    name: str = ""
    subjects: list[str] = field(default_factory=list)
    storage: str = ""
    replicas: int = 0
    max_age: str = ""
    max_bytes: int = 0
    max_msgs: int = 0
    compression: bool = False


@dataclass(slots=True)
class NATSKVConfig:
    bucket: str = ""
    key_pattern: str = ""
    ttl: str = ""
    max_bytes: int = 0
    replicas: int = 0
    storage: str = ""
    description: str = ""
    message_types: list[str] = field(default_factory=list)


@dataclass(slots=True)
class NATSSinkConfig:
    url: str = ""
    subject: str = ""  # static subject or a template such as "{entity_id}.mavlink"
    token: str = ""
    creds_file: str = ""
    queue_size: int = 0
    backpressure_policy: str = ""
    stream: NATSStreamConfig | None = None
    kv: NATSKVConfig | None = None


SinkBlock = Union[
    S3SinkConfig,
    GCSSinkConfig,
    BigQuerySinkConfig,
    TimestreamSinkConfig,
    InfluxDBSinkConfig,
    PrometheusSinkConfig,
    ElasticsearchSinkConfig,
    KafkaSinkConfig,
    FileSinkConfig,
    NATSSinkConfig,
]


@dataclass(slots=True)
class SinksConfig:
    """Set of sink blocks present in the source, keyed by backend."""

    blocks: dict[SinkKind, SinkBlock] = field(default_factory=dict)

    def kinds(self) -> list[SinkKind]:
        return [kind for kind in SinkKind if kind in self.blocks]

    def get(self, kind: SinkKind | str) -> SinkBlock | None:
        return self.blocks.get(SinkKind(kind))

    def __getitem__(self, kind: SinkKind | str) -> SinkBlock:
        return self.blocks[SinkKind(kind)]

    def __contains__(self, kind: object) -> bool:
        try:
            return SinkKind(kind) in self.blocks
        except ValueError:
            return False

    def __iter__(self) -> Iterator[tuple[SinkKind, SinkBlock]]:
        for kind in self.kinds():
            yield kind, self.blocks[kind]

    def __len__(self) -> int:
        return len(self.blocks)


def _parse_s3(raw: dict[str, Any], prefix: str) -> S3SinkConfig:
    return S3SinkConfig(
        bucket=read_str(raw, "bucket", field_name=f"{prefix}.bucket"),
        region=read_str(raw, "region", field_name=f"{prefix}.region"),
        access_key=read_str(raw, "access_key", field_name=f"{prefix}.access_key"),
        secret_key=read_str(raw, "secret_key", field_name=f"{prefix}.secret_key"),
        prefix=read_str(raw, "prefix", field_name=f"{prefix}.prefix"),
        flush_interval=read_duration(raw, "flush_interval", field_name=f"{prefix}.flush_interval"),
        queue_size=read_int(raw, "queue_size", field_name=f"{prefix}.queue_size"),
        backpressure_policy=read_str(raw, "backpressure_policy", field_name=f"{prefix}.backpressure_policy"),
    )


def _parse_gcs(raw: dict[str, Any], prefix: str) -> GCSSinkConfig:
    return GCSSinkConfig(
        bucket=read_str(raw, "bucket", field_name=f"{prefix}.bucket"),
        project_id=read_str(raw, "project_id", field_name=f"{prefix}.project_id"),
        credentials=read_str(raw, "credentials", field_name=f"{prefix}.credentials"),
        prefix=read_str(raw, "prefix", field_name=f"{prefix}.prefix"),
        flush_interval=read_duration(raw, "flush_interval", field_name=f"{prefix}.flush_interval"),
        queue_size=read_int(raw, "queue_size", field_name=f"{prefix}.queue_size"),
        backpressure_policy=read_str(raw, "backpressure_policy", field_name=f"{prefix}.backpressure_policy"),
    )


def _parse_bigquery(raw: dict[str, Any], prefix: str) -> BigQuerySinkConfig:
    return BigQuerySinkConfig(
        project_id=read_str(raw, "project_id", field_name=f"{prefix}.project_id"),
        dataset=read_str(raw, "dataset", field_name=f"{prefix}.dataset"),
        table=read_str(raw, "table", field_name=f"{prefix}.table"),
        credentials=read_str(raw, "credentials", field_name=f"{prefix}.credentials"),
        batch_size=read_int(raw, "batch_size", field_name=f"{prefix}.batch_size"),
        flush_interval=read_str(raw, "flush_interval", field_name=f"{prefix}.flush_interval"),
        queue_size=read_int(raw, "queue_size", field_name=f"{prefix}.queue_size"),
        backpressure_policy=read_str(raw, "backpressure_policy", field_name=f"{prefix}.backpressure_policy"),
    )


def _parse_timestream(raw: dict[str, Any], prefix: str) -> TimestreamSinkConfig:
    return TimestreamSinkConfig(
        database=read_str(raw, "database", field_name=f"{prefix}.database"),
        table=read_str(raw, "table", field_name=f"{prefix}.table"),
        region=read_str(raw, "region", field_name=f"{prefix}.region"),
        access_key=read_str(raw, "access_key", field_name=f"{prefix}.access_key"),
        secret_key=read_str(raw, "secret_key", field_name=f"{prefix}.secret_key"),
        session_token=read_str(raw, "session_token", field_name=f"{prefix}.session_token"),
        batch_size=read_int(raw, "batch_size", field_name=f"{prefix}.batch_size"),
        flush_interval=read_str(raw, "flush_interval", field_name=f"{prefix}.flush_interval"),
        queue_size=read_int(raw, "queue_size", field_name=f"{prefix}.queue_size"),
        backpressure_policy=read_str(raw, "backpressure_policy", field_name=f"{prefix}.backpressure_policy"),
    )


def _parse_influxdb(raw: dict[str, Any], prefix: str) -> InfluxDBSinkConfig:
    return InfluxDBSinkConfig(
        url=read_str(raw, "url", field_name=f"{prefix}.url"),
        database=read_str(raw, "database", field_name=f"{prefix}.database"),
        username=read_str(raw, "username", field_name=f"{prefix}.username"),
        password=read_str(raw, "password", field_name=f"{prefix}.password"),
        token=read_str(raw, "token", field_name=f"{prefix}.token"),
        organization=read_str(raw, "organization", field_name=f"{prefix}.organization"),
        bucket=read_str(raw, "bucket", field_name=f"{prefix}.bucket"),
        batch_size=read_int(raw, "batch_size", field_name=f"{prefix}.batch_size"),
        flush_interval=read_str(raw, "flush_interval", field_name=f"{prefix}.flush_interval"),
        queue_size=read_int(raw, "queue_size", field_name=f"{prefix}.queue_size"),
        backpressure_policy=read_str(raw, "backpressure_policy", field_name=f"{prefix}.backpressure_policy"),
    )


def _parse_prometheus(raw: dict[str, Any], prefix: str) -> PrometheusSinkConfig:
    return PrometheusSinkConfig(
        url=read_str(raw, "url", field_name=f"{prefix}.url"),
        job=read_str(raw, "job", field_name=f"{prefix}.job"),
        instance=read_str(raw, "instance", field_name=f"{prefix}.instance"),
        batch_size=read_int(raw, "batch_size", field_name=f"{prefix}.batch_size"),
        flush_interval=read_str(raw, "flush_interval", field_name=f"{prefix}.flush_interval"),
        queue_size=read_int(raw, "queue_size", field_name=f"{prefix}.queue_size"),
        backpressure_policy=read_str(raw, "backpressure_policy", field_name=f"{prefix}.backpressure_policy"),
    )


def _parse_elasticsearch(raw: dict[str, Any], prefix: str) -> ElasticsearchSinkConfig:
    return ElasticsearchSinkConfig(
        urls=read_str_list(raw, "urls", field_name=f"{prefix}.urls"),
        index=read_str(raw, "index", field_name=f"{prefix}.index"),
        username=read_str(raw, "username", field_name=f"{prefix}.username"),
        password=read_str(raw, "password", field_name=f"{prefix}.password"),
        api_key=read_str(raw, "api_key", field_name=f"{prefix}.api_key"),
        batch_size=read_int(raw, "batch_size", field_name=f"{prefix}.batch_size"),
        flush_interval=read_str(raw, "flush_interval", field_name=f"{prefix}.flush_interval"),
        queue_size=read_int(raw, "queue_size", field_name=f"{prefix}.queue_size"),
        backpressure_policy=read_str(raw, "backpressure_policy", field_name=f"{prefix}.backpressure_policy"),
    )


def _parse_kafka(raw: dict[str, Any], prefix: str) -> KafkaSinkConfig:
    return KafkaSinkConfig(
        brokers=read_str_list(raw, "brokers", field_name=f"{prefix}.brokers"),
        topic=read_str(raw, "topic", field_name=f"{prefix}.topic"),
        queue_size=read_int(raw, "queue_size", field_name=f"{prefix}.queue_size"),
        backpressure_policy=read_str(raw, "backpressure_policy", field_name=f"{prefix}.backpressure_policy"),
    )


def _parse_file(raw: dict[str, Any], prefix: str) -> FileSinkConfig:
    return FileSinkConfig(
        path=read_str(raw, "path", field_name=f"{prefix}.path"),
        prefix=read_str(raw, "prefix", field_name=f"{prefix}.prefix"),
        format=read_str(raw, "format", field_name=f"{prefix}.format"),
        rotation_interval=read_duration(raw, "rotation_interval", field_name=f"{prefix}.rotation_interval"),
        queue_size=read_int(raw, "queue_size", field_name=f"{prefix}.queue_size"),
        backpressure_policy=read_str(raw, "backpressure_policy", field_name=f"{prefix}.backpressure_policy"),
    )


def _parse_nats_stream(raw: dict[str, Any], prefix: str) -> NATSStreamConfig:
    return NATSStreamConfig(
        name=read_str(raw, "name", field_name=f"{prefix}.name"),
        subjects=read_str_list(raw, "subjects", field_name=f"{prefix}.subjects"),
        storage=read_str(raw, "storage", field_name=f"{prefix}.storage"),
        replicas=read_int(raw, "replicas", field_name=f"{prefix}.replicas"),
        max_age=read_str(raw, "max_age", field_name=f"{prefix}.max_age"),
        max_bytes=read_int(raw, "max_bytes", field_name=f"{prefix}.max_bytes"),
        max_msgs=read_int(raw, "max_msgs", field_name=f"{prefix}.max_msgs"),
        compression=read_bool(raw, "compression", field_name=f"{prefix}.compression"),
    )


def _parse_nats_kv(raw: dict[str, Any], prefix: str) -> NATSKVConfig:
    return NATSKVConfig(
        bucket=read_str(raw, "bucket", field_name=f"{prefix}.bucket"),
        key_pattern=read_str(raw, "key_pattern", field_name=f"{prefix}.key_pattern"),
        ttl=read_str(raw, "ttl", field_name=f"{prefix}.ttl"),
        max_bytes=read_int(raw, "max_bytes", field_name=f"{prefix}.max_bytes"),
        replicas=read_int(raw, "replicas", field_name=f"{prefix}.replicas"),
        storage=read_str(raw, "storage", field_name=f"{prefix}.storage"),
        description=read_str(raw, "description", field_name=f"{prefix}.description"),
        message_types=read_str_list(raw, "message_types", field_name=f"{prefix}.message_types"),
    )


def _parse_nats(raw: dict[str, Any], prefix: str) -> NATSSinkConfig:
    stream_raw = read_optional_section(raw, "stream", field_name=f"{prefix}.stream")
    kv_raw = read_optional_section(raw, "kv", field_name=f"{prefix}.kv")
    return NATSSinkConfig(
        url=read_str(raw, "url", field_name=f"{prefix}.url"),
        subject=read_str(raw, "subject", field_name=f"{prefix}.subject"),
        token=read_str(raw, "token", field_name=f"{prefix}.token"),
        creds_file=read_str(raw, "creds_file", field_name=f"{prefix}.creds_file"),
        queue_size=read_int(raw, "queue_size", field_name=f"{prefix}.queue_size"),
        backpressure_policy=read_str(raw, "backpressure_policy", field_name=f"{prefix}.backpressure_policy"),
        stream=_parse_nats_stream(stream_raw, f"{prefix}.stream") if stream_raw is not None else None,
        kv=_parse_nats_kv(kv_raw, f"{prefix}.kv") if kv_raw is not None else None,
    )


_SINK_PARSERS: dict[SinkKind, Callable[[dict[str, Any], str], SinkBlock]] = {
    SinkKind.S3: _parse_s3,
    SinkKind.GCS: _parse_gcs,
    SinkKind.BIGQUERY: _parse_bigquery,
    SinkKind.TIMESTREAM: _parse_timestream,
    SinkKind.INFLUXDB: _parse_influxdb,
    SinkKind.PROMETHEUS: _parse_prometheus,
    SinkKind.ELASTICSEARCH: _parse_elasticsearch,
    SinkKind.KAFKA: _parse_kafka,
    SinkKind.FILE: _parse_file,
    SinkKind.NATS: _parse_nats,
}


def parse_sinks(raw: Any) -> SinksConfig:
    """Build the set of sink blocks explicitly present under ``sinks``.

    A key set to ``null`` counts as absent. Unknown backend keys are ignored.
    """
    sinks_raw = read_section(raw, field_name="sinks")
    blocks: dict[SinkKind, SinkBlock] = {}
    for kind, parser in _SINK_PARSERS.items():
        block_raw = sinks_raw.get(kind.value)
        if block_raw is None:
            continue
        field_name = f"sinks.{kind.value}"
        blocks[kind] = parser(read_section(block_raw, field_name=field_name), field_name)
    return SinksConfig(blocks=blocks)
