"""Colector de telemetría de máquina.

Flujo: Dispositivo/Modelo → Acquirer → canal acotado → Forwarder → Sink

Estructura modular:
- domain/: Sample, Batch, DataPoint, DeviceConfig
- acquisition/: random-walk, fuentes, Acquirer con corrección de deriva
- device/: driver TCP de la máquina demo
- relay/: canal acotado con backpressure
- sink/: InfluxDB v2 (line protocol)
- forwarder.py: entrega best-effort al sink
- pipeline/: supervisor y construcción desde configuración
"""
