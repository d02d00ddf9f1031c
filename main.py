#!/usr/bin/env python3
"""
절차적 궤도 생성기 메인 실행 스크립트
"""

import argparse
import sys
from typing import List, Optional

# 프로젝트 모듈 임포트
from config.settings import get_config, ProjectConfig
from generation.asteroid_belt import AsteroidBeltGenerator, AsteroidBeltSpec, AsteroidBeltResult
from generation.moons import MoonPlacementGenerator, MoonPlacementResult, PlanetSummary
from generation.random_stream import RandomStream
from generation.seeds import derive_indexed
from orbital_mechanics.physics import ParentContext
from utils.constants import AU, R_EARTH, RAD_TO_DEG
from utils.helpers import format_distance, setup_logging

# 루트 시드에서 생성 단계별 시드를 파생할 때 쓰는 인덱스
MOON_STREAM_INDEX = 0
BELT_STREAM_INDEX = 1


def run_moon_placement(config: ProjectConfig, planet: PlanetSummary,
                       context: ParentContext) -> MoonPlacementResult:
    """위성 배치 실행"""
    stream = RandomStream(derive_indexed(config.root_seed, MOON_STREAM_INDEX))
    generator = MoonPlacementGenerator(config.moons)
    return generator.place_moons(planet, context, stream)


def run_belt_generation(config: ProjectConfig) -> AsteroidBeltResult:
    """소행성대 생성 실행"""
    stream = RandomStream(derive_indexed(config.root_seed, BELT_STREAM_INDEX))
    spec = AsteroidBeltSpec.from_config(config.belt)
    return AsteroidBeltGenerator(config.belt).generate(spec, stream)


def print_moon_summary(result: MoonPlacementResult):
    """위성 배치 결과 출력"""
    print("\n=== 위성 배치 결과 ===")
    print(f"시드: {result.seed}")
    print(f"질량 등급: {result.mass_class}")
    print(f"힐 반지름: {format_distance(result.hill_radius)}")
    print(f"배치 범위: {format_distance(result.inner_limit)} ~ {format_distance(result.outer_limit)}")
    print(f"위성 수: {result.count} (포획 {result.captured_count})")

    if result.count == 0:
        print("  위성 없음")
        return

    for moon in result.moons:
        kind = "포획" if moon.captured else "규칙"
        print(f"  [{moon.index}] {format_distance(moon.distance):>16}  "
              f"{moon.hill_fraction:6.3f} R_H  {kind}  {moon.size_category.value:<6}  seed={moon.seed}")


def print_belt_summary(result: AsteroidBeltResult):
    """소행성대 생성 결과 출력"""
    background = result.background_bodies
    print("\n=== 소행성대 생성 결과 ===")
    print(f"시드: {result.seed}")
    print(f"범위: {result.spec.inner_radius:.3f} ~ {result.spec.outer_radius:.3f} AU")
    print(f"배경 천체: {len(background)}")
    print(f"주요 천체: {len(result.major_bodies)}")
    print(f"중앙값 대체: {result.fallback_count}")

    if background:
        a_values = [body.elements.a for body in background]
        radii = [body.radius for body in background]
        inclinations = [body.elements.i * RAD_TO_DEG for body in background]
        print(f"  반장축: 평균 {sum(a_values) / len(a_values):.3f} AU "
              f"(최소 {min(a_values):.3f}, 최대 {max(a_values):.3f})")
        print(f"  반지름: 중앙값 {sorted(radii)[len(radii) // 2]:.2f} km, 최대 {max(radii):.2f} km")
        print(f"  경사각: 평균 {sum(inclinations) / len(inclinations):.2f}°")


def print_seed_tree(root_seed: int, depth: int = 2, width: int = 3):
    """시드 파생 계층 출력"""
    print(f"\n=== 시드 파생 (루트 {root_seed}) ===")

    def _walk(seed: int, level: int, path: List[int]):
        if level == depth:
            return
        for index in range(width):
            child = derive_indexed(seed, index)
            label = "/".join(str(p) for p in path + [index])
            print(f"{'  ' * (level + 1)}{label}: {child}")
            _walk(child, level + 1, path + [index])

    _walk(root_seed, 0, [])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="시드 기반 위성/소행성대 궤도 생성기",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
예제:
  # 목성형 행성의 위성 배치
  python main.py --mode moons --seed 7 --planet-mass 317.8 --planet-radius 11.2 --planet-distance 5.2

  # 기본 소행성대 생성
  python main.py --mode belt --seed 7 --asteroid-count 2000

  # 설정 파일 사용
  python main.py --mode belt --config my_config.json
        """
    )

    parser.add_argument('--mode', type=str, default='moons',
                        choices=['moons', 'belt', 'seeds'],
                        help='실행 모드 (기본값: moons)')
    parser.add_argument('--seed', type=int, default=None,
                        help='루트 시드')

    # 위성 배치 관련 인자
    parser.add_argument('--planet-mass', type=float, default=317.8,
                        help='행성 질량 (지구 질량 단위)')
    parser.add_argument('--planet-radius', type=float, default=11.2,
                        help='행성 반지름 (지구 반지름 단위)')
    parser.add_argument('--planet-distance', type=float, default=5.2,
                        help='행성 궤도 거리 (AU)')
    parser.add_argument('--star-mass', type=float, default=1.0,
                        help='항성 질량 (태양 질량 단위)')
    parser.add_argument('--star-luminosity', type=float, default=1.0,
                        help='항성 광도 (태양 광도 단위)')

    # 소행성대 관련 인자
    parser.add_argument('--asteroid-count', type=int, default=None,
                        help='배경 소행성 수')

    # 설정 관련 인자
    parser.add_argument('--config', type=str, default=None,
                        help='설정 파일 경로')
    parser.add_argument('--save-config', type=str, default=None,
                        help='사용한 설정을 저장할 경로')
    parser.add_argument('--log-level', type=str, default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='로그 레벨')
    parser.add_argument('--debug', action='store_true',
                        help='디버그 모드')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """메인 함수"""
    args = build_parser().parse_args(argv)

    # 설정 로드
    if args.config:
        config = ProjectConfig.load_from_file(args.config)
        if args.debug:
            config.debug_mode = True
            config.logging.level = "DEBUG"
    else:
        config = get_config(experiment_name=f"{args.mode}_run", debug_mode=args.debug)

    if args.seed is not None:
        config.root_seed = args.seed
    if args.asteroid_count is not None:
        config.belt.asteroid_count = args.asteroid_count
    if args.log_level:
        config.logging.level = args.log_level

    setup_logging(config.logging.level, config.logging.log_file)

    if args.save_config:
        config.save_to_file(args.save_config)
        print(f"설정 저장: {args.save_config}")

    try:
        if args.mode == 'moons':
            planet = PlanetSummary.from_earth_units(args.planet_mass, args.planet_radius, args.planet_distance)
            context = ParentContext.from_solar_units(
                star_mass_solar=args.star_mass,
                luminosity_solar=args.star_luminosity,
                distance_au=planet.orbital_distance / AU,
            )
            print(f"행성: {args.planet_mass} M_E, {planet.radius / R_EARTH:.2f} R_E, {args.planet_distance} AU")
            print(f"평형 온도: {context.equilibrium_temperature():.1f} K")
            print_moon_summary(run_moon_placement(config, planet, context))

        elif args.mode == 'belt':
            print_belt_summary(run_belt_generation(config))

        elif args.mode == 'seeds':
            print_seed_tree(config.root_seed)

    except KeyboardInterrupt:
        print("\n사용자에 의해 중단됨")
        return 0
    except Exception as e:
        print(f"\n오류 발생: {e}")
        if config.debug_mode:
            import traceback
            traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
